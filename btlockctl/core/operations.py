"""Single-attempt connect/disconnect operations on one device."""

from __future__ import annotations

import logging

from btlockctl.backends.base import STATUS_SUCCESS, DeviceHandle
from btlockctl.core.model import Action, ConnectPolicy, OperationResult, Outcome

LOGGER = logging.getLogger(__name__)


def _result(
    device: DeviceHandle,
    action: Action,
    ok: bool,
    reason: Outcome,
    status: int | None = None,
) -> OperationResult:
    return OperationResult(
        name=device.name,
        address=device.address,
        action=action,
        ok=ok,
        reason=reason,
        status=status,
    )


def connect_device(device: DeviceHandle, policy: ConnectPolicy | None = None) -> OperationResult:
    """Connect `device` unless it is already connected.

    An already-connected device is a success and no connection is opened.
    """
    policy = policy or ConnectPolicy()
    if device.is_connected():
        result = _result(device, Action.CONNECT, True, Outcome.ALREADY_CONNECTED)
        LOGGER.debug("%s already connected", result.label)
        return result

    status = device.open_connection(policy.page_timeout_s, policy.require_authentication)
    if status == STATUS_SUCCESS:
        result = _result(device, Action.CONNECT, True, Outcome.CONNECTED, status)
        LOGGER.info("Connected %s", result.label)
    else:
        result = _result(device, Action.CONNECT, False, Outcome.CONNECT_FAILED, status)
        LOGGER.warning("Connect failed for %s: status %#x", result.label, status)
    return result


def disconnect_device(device: DeviceHandle) -> OperationResult:
    """Disconnect `device`.

    A device that is not connected is reported as a failure and nothing is closed.
    """
    if not device.is_connected():
        result = _result(device, Action.DISCONNECT, False, Outcome.NOT_CONNECTED)
        LOGGER.debug("%s not connected", result.label)
        return result

    status = device.close_connection()
    if status == STATUS_SUCCESS:
        result = _result(device, Action.DISCONNECT, True, Outcome.DISCONNECTED, status)
        LOGGER.info("Disconnected %s", result.label)
    else:
        result = _result(device, Action.DISCONNECT, False, Outcome.DISCONNECT_FAILED, status)
        LOGGER.warning("Disconnect failed for %s: status %#x", result.label, status)
    return result
