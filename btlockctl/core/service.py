"""Service layer wiring settings, backends, and the lock-state controller."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from btlockctl.backends.base import BluetoothService, EventLoop
from btlockctl.core.config_loader import load_settings, merge_patterns
from btlockctl.core.controller import LockStateController
from btlockctl.core.device_match import resolve_matched_devices
from btlockctl.core.model import Settings

LOGGER = logging.getLogger(__name__)


class LockService:
    def __init__(
        self,
        *,
        bluetooth: BluetoothService | None = None,
        source: EventLoop | None = None,
        settings: Settings | None = None,
        config_file: Path | None = None,
    ) -> None:
        self.settings = settings or load_settings(config_file)
        self.runtime_warnings = _runtime_warnings()
        if bluetooth is None:
            from btlockctl.backends.iobluetooth import IOBluetoothService

            bluetooth = IOBluetoothService()
        if source is None:
            from btlockctl.backends.macos_notifications import MacOSNotificationSource

            source = MacOSNotificationSource()
        self.bluetooth = bluetooth
        self.source = source
        self.controller: LockStateController | None = None

    def patterns(self, extra: Iterable[str] = ()) -> tuple[str, ...]:
        return merge_patterns(extra, self.settings.patterns)

    def start(self, patterns: Iterable[str] = ()) -> LockStateController:
        if self.controller is not None:
            return self.controller
        devices = resolve_matched_devices(self.bluetooth, self.patterns(patterns))
        self.controller = LockStateController(
            self.source,
            devices,
            policy=self.settings.connect_policy,
        )
        self.source.start()
        return self.controller

    def run(self, patterns: Iterable[str] = ()) -> None:
        """Start, block in the event loop, and always release subscriptions on exit."""
        try:
            self.start(patterns)
            LOGGER.info("Watching screen lock state")
            self.source.run()
        finally:
            self.close()

    def close(self) -> None:
        if self.controller is not None:
            self.controller.close()
        self.source.stop()


def _runtime_warnings() -> tuple[str, ...]:
    warnings: list[str] = []
    if sys.platform != "darwin":
        warnings.append(
            f"Platform '{sys.platform}' is not macOS; screen lock and Bluetooth control will not work."
        )
    return tuple(warnings)
