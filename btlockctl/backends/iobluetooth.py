"""IOBluetooth (macOS) implementation of the Bluetooth service."""

from __future__ import annotations

import logging
from typing import Any

from btlockctl.core.errors import BackendUnavailableError, RegistryError

# Baseband page timeout is counted in 0.625 ms slots with a 16-bit HCI field.
_SLOTS_PER_SECOND = 1600
_MAX_PAGE_TIMEOUT_SLOTS = 0xFFFF

LOGGER = logging.getLogger(__name__)


def page_timeout_slots(seconds: int) -> int:
    if seconds <= 0:
        raise ValueError("page timeout must be positive")
    return min(seconds * _SLOTS_PER_SECOND, _MAX_PAGE_TIMEOUT_SLOTS)


class IOBluetoothDeviceHandle:
    """Wraps one `IOBluetoothDevice` behind the `DeviceHandle` interface."""

    def __init__(self, device: Any) -> None:
        self._device = device

    @property
    def name(self) -> str | None:
        name = self._device.name()
        return str(name) if name is not None else None

    @property
    def address(self) -> str:
        address = self._device.addressString()
        if not address:
            return f"<unknown:{id(self._device):x}>"
        return str(address).upper()

    def is_connected(self) -> bool:
        return bool(self._device.isConnected())

    def open_connection(self, page_timeout_s: int, require_authentication: bool) -> int:
        return int(
            self._device.openConnection_withPageTimeout_authenticationRequired_(
                None,
                page_timeout_slots(page_timeout_s),
                require_authentication,
            )
        )

    def close_connection(self) -> int:
        return int(self._device.closeConnection())

    def __repr__(self) -> str:
        return f"IOBluetoothDeviceHandle(name={self.name!r}, address={self.address!r})"


class IOBluetoothService:
    def paired_devices(self) -> list[IOBluetoothDeviceHandle]:
        try:
            from IOBluetooth import IOBluetoothDevice  # type: ignore
        except ImportError as exc:
            raise BackendUnavailableError(
                "Bluetooth control requires macOS with 'pyobjc-framework-IOBluetooth' installed."
            ) from exc

        try:
            paired = IOBluetoothDevice.pairedDevices()
        except Exception as exc:
            raise RegistryError(f"IOBluetooth pairedDevices() failed: {exc}") from exc

        if paired is None:
            return []

        handles = [IOBluetoothDeviceHandle(device) for device in paired if device is not None]
        LOGGER.debug("Pairing registry returned %d device(s)", len(handles))
        return handles
