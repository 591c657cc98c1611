from __future__ import annotations

import sys
import types

import pytest

from btlockctl.backends.iobluetooth import IOBluetoothDeviceHandle, IOBluetoothService, page_timeout_slots
from btlockctl.core.device_match import resolve
from btlockctl.core.errors import BackendUnavailableError, RegistryError


class FakeObjCDevice:
    def __init__(self, name, address, connected=False, status=0) -> None:
        self._name = name
        self._address = address
        self._connected = connected
        self._status = status
        self.open_args: list[tuple] = []

    def name(self):
        return self._name

    def addressString(self):
        return self._address

    def isConnected(self):
        return self._connected

    def openConnection_withPageTimeout_authenticationRequired_(self, target, timeout, auth):
        self.open_args.append((target, timeout, auth))
        return self._status

    def closeConnection(self):
        return self._status


def _install_iobluetooth(monkeypatch: pytest.MonkeyPatch, paired) -> None:
    module = types.ModuleType("IOBluetooth")

    class IOBluetoothDevice:
        @staticmethod
        def pairedDevices():
            if isinstance(paired, Exception):
                raise paired
            return paired

    module.IOBluetoothDevice = IOBluetoothDevice
    monkeypatch.setitem(sys.modules, "IOBluetooth", module)


def test_page_timeout_converts_seconds_to_slots() -> None:
    assert page_timeout_slots(10) == 16000
    assert page_timeout_slots(40) == 64000
    assert page_timeout_slots(41) == 0xFFFF
    with pytest.raises(ValueError):
        page_timeout_slots(0)


def test_handle_wraps_objc_device() -> None:
    raw = FakeObjCDevice("MyHeadphones L", "aa-bb-cc-00-00-01", connected=True, status=0)
    handle = IOBluetoothDeviceHandle(raw)

    assert handle.name == "MyHeadphones L"
    assert handle.address == "AA-BB-CC-00-00-01"
    assert handle.is_connected() is True
    assert handle.open_connection(10, True) == 0
    assert raw.open_args == [(None, 16000, True)]
    assert handle.close_connection() == 0


def test_handle_reports_missing_name_as_none() -> None:
    handle = IOBluetoothDeviceHandle(FakeObjCDevice(None, "aa-bb-cc-00-00-02"))
    assert handle.name is None


def test_paired_devices_wraps_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_iobluetooth(monkeypatch, [FakeObjCDevice("Mouse", "aa-bb-cc-00-00-02"), None])
    devices = IOBluetoothService().paired_devices()
    assert [d.name for d in devices] == ["Mouse"]


def test_paired_devices_none_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_iobluetooth(monkeypatch, None)
    assert IOBluetoothService().paired_devices() == []


def test_registry_exception_becomes_registry_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_iobluetooth(monkeypatch, RuntimeError("no permission"))
    with pytest.raises(RegistryError):
        IOBluetoothService().paired_devices()


def test_missing_framework_raises_clean_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "IOBluetooth", None)
    with pytest.raises(BackendUnavailableError):
        IOBluetoothService().paired_devices()


def test_devices_without_address_stay_distinct() -> None:
    first = IOBluetoothDeviceHandle(FakeObjCDevice("Mouse A", None))
    second = IOBluetoothDeviceHandle(FakeObjCDevice("Mouse B", None))

    assert first.address != second.address
    assert first.address == first.address
    assert [d.name for d in resolve(["Mouse"], [first, second])] == ["Mouse A", "Mouse B"]
