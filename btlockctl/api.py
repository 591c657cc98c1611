"""Stable public API for embedding btlockctl in other tooling.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from btlockctl.backends.base import STATUS_SUCCESS, BluetoothService, DeviceHandle, EventLoop, EventSource
from btlockctl.core.config_loader import load_settings
from btlockctl.core.controller import LockStateController
from btlockctl.core.device_match import resolve, resolve_matched_devices
from btlockctl.core.errors import (
    BackendUnavailableError,
    BtlockctlError,
    ConfigLoadError,
    ConfigValidationError,
    RegistryError,
)
from btlockctl.core.events import (
    DISPLAY_SLEEP,
    DISPLAY_WAKE,
    EVENTS,
    SCREEN_LOCKED,
    SCREEN_UNLOCKED,
    EventDispatcher,
)
from btlockctl.core.model import (
    Action,
    ConnectPolicy,
    ControllerState,
    OperationResult,
    Outcome,
    Settings,
)
from btlockctl.core.operations import connect_device, disconnect_device
from btlockctl.core.service import LockService

__all__ = [
    "BtlockctlError",
    "BackendUnavailableError",
    "ConfigLoadError",
    "ConfigValidationError",
    "RegistryError",
    "STATUS_SUCCESS",
    "BluetoothService",
    "DeviceHandle",
    "EventLoop",
    "EventSource",
    "EventDispatcher",
    "EVENTS",
    "SCREEN_LOCKED",
    "SCREEN_UNLOCKED",
    "DISPLAY_SLEEP",
    "DISPLAY_WAKE",
    "Action",
    "ConnectPolicy",
    "ControllerState",
    "OperationResult",
    "Outcome",
    "Settings",
    "LockService",
    "LockStateController",
    "connect_device",
    "disconnect_device",
    "load_settings",
    "resolve",
    "resolve_matched_devices",
]
