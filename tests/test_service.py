from __future__ import annotations

import sys

import pytest

from btlockctl.core import events
from btlockctl.core.events import EventDispatcher
from btlockctl.core.model import ControllerState, Settings
from btlockctl.core.service import LockService


class FakeDevice:
    def __init__(self, name: str, address: str, connected: bool) -> None:
        self.name = name
        self.address = address
        self.connected = connected
        self.calls: list[tuple] = []

    def is_connected(self) -> bool:
        return self.connected

    def open_connection(self, page_timeout_s: int, require_authentication: bool) -> int:
        self.calls.append(("open", page_timeout_s, require_authentication))
        self.connected = True
        return 0

    def close_connection(self) -> int:
        self.calls.append(("close",))
        self.connected = False
        return 0


class FakeBluetooth:
    def __init__(self, devices) -> None:
        self.devices = devices

    def paired_devices(self):
        return self.devices


class FakeLoop(EventDispatcher):
    def __init__(self, script=()) -> None:
        super().__init__()
        self.script = tuple(script)
        self.started = 0
        self.stopped = 0

    def start(self) -> None:
        self.started += 1

    def stop(self) -> None:
        self.stopped += 1

    def run(self) -> None:
        for event in self.script:
            self.emit(event)


def _devices():
    return [
        FakeDevice("MyHeadphones L", "AA:00:00:00:00:01", connected=True),
        FakeDevice("Magic Mouse", "AA:00:00:00:00:02", connected=True),
        FakeDevice("Keyboard", "AA:00:00:00:00:03", connected=True),
    ]


def test_start_merges_cli_and_configured_patterns() -> None:
    devices = _devices()
    service = LockService(
        bluetooth=FakeBluetooth(devices),
        source=FakeLoop(),
        settings=Settings(patterns=("Mouse",)),
    )

    controller = service.start(["MyHeadphones"])

    assert service.patterns(["MyHeadphones"]) == ("MyHeadphones", "Mouse")
    assert [d.address for d in controller.devices] == ["AA:00:00:00:00:01", "AA:00:00:00:00:02"]
    assert service.source.started == 1
    assert service.start() is controller


def test_run_handles_signals_and_closes() -> None:
    devices = _devices()
    loop = FakeLoop([events.SCREEN_LOCKED, events.DISPLAY_SLEEP, events.DISPLAY_WAKE, events.SCREEN_UNLOCKED])
    service = LockService(
        bluetooth=FakeBluetooth(devices),
        source=loop,
        settings=Settings(connect_timeout_s=7),
    )

    service.run(["MyHeadphones"])

    assert devices[0].calls == [("close",), ("open", 7, True)]
    assert devices[1].calls == []
    assert service.controller is not None
    assert service.controller.state is ControllerState.DISPOSED
    assert loop.stopped == 1
    for event in events.EVENTS:
        assert loop.handlers(event) == ()


def test_run_closes_when_loop_raises() -> None:
    class FailingLoop(FakeLoop):
        def run(self) -> None:
            raise KeyboardInterrupt

    loop = FailingLoop()
    service = LockService(bluetooth=FakeBluetooth(_devices()), source=loop, settings=Settings())

    with pytest.raises(KeyboardInterrupt):
        service.run(["Keyboard"])

    assert service.controller is not None
    assert service.controller.state is ControllerState.DISPOSED
    assert loop.stopped == 1


def test_no_patterns_controls_nothing() -> None:
    devices = _devices()
    loop = FakeLoop([events.SCREEN_LOCKED, events.SCREEN_UNLOCKED])
    service = LockService(bluetooth=FakeBluetooth(devices), source=loop, settings=Settings())

    service.run()

    assert all(d.calls == [] for d in devices)


def test_runtime_warning_on_non_macos(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    service = LockService(bluetooth=FakeBluetooth([]), source=FakeLoop(), settings=Settings())
    assert any("not macOS" in w for w in service.runtime_warnings)


def test_settings_loaded_from_config_file(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("devices: [Keyboard]\nconnect_timeout_s: 3\n", encoding="utf-8")

    service = LockService(bluetooth=FakeBluetooth(_devices()), source=FakeLoop(), config_file=path)

    assert service.settings.patterns == ("Keyboard",)
    assert service.settings.connect_policy.page_timeout_s == 3
