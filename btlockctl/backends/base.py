"""Backend capability interfaces."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

STATUS_SUCCESS = 0

EventHandler = Callable[[], object]


class DeviceHandle(Protocol):
    @property
    def name(self) -> str | None:
        """Name currently reported by the device, if any."""

    @property
    def address(self) -> str:
        """Stable Bluetooth address string."""

    def is_connected(self) -> bool:
        """Live connection state; never cached."""

    def open_connection(self, page_timeout_s: int, require_authentication: bool) -> int:
        """Open a baseband connection and return the stack status code."""

    def close_connection(self) -> int:
        """Close the baseband connection and return the stack status code."""


class BluetoothService(Protocol):
    def paired_devices(self) -> Sequence[DeviceHandle]:
        """Return every device in the pairing registry."""


class EventSource(Protocol):
    def subscribe(self, event: str, handler: EventHandler) -> None:
        """Register `handler` for a named event channel."""

    def unsubscribe(self, event: str, handler: EventHandler) -> None:
        """Remove a handler previously registered with `subscribe`."""


class EventLoop(EventSource, Protocol):
    def start(self) -> None:
        """Begin delivering OS notifications to subscribed handlers."""

    def stop(self) -> None:
        """Stop delivering OS notifications."""

    def run(self) -> None:
        """Block running the event loop until the process is asked to exit."""
