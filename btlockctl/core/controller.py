"""Lock-state controller: screen lock/unlock drives device connections."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from btlockctl.backends.base import DeviceHandle, EventHandler, EventSource
from btlockctl.core import events
from btlockctl.core.model import Action, ConnectPolicy, ControllerState, OperationResult, Outcome
from btlockctl.core.operations import connect_device, disconnect_device

LOGGER = logging.getLogger(__name__)


class LockStateController:
    """Long-lived handler for the four screen/display signals.

    Subscribes on construction and stays ACTIVE until `close()`, which removes
    every subscription. The matched device set is fixed for the controller's
    lifetime and devices are handled one at a time in that order.
    """

    def __init__(
        self,
        source: EventSource,
        devices: Sequence[DeviceHandle],
        *,
        policy: ConnectPolicy | None = None,
    ) -> None:
        self._source = source
        self._devices = tuple(devices)
        self._policy = policy or ConnectPolicy()
        self._lock = threading.Lock()
        self._subscriptions: dict[str, EventHandler] = {
            events.SCREEN_LOCKED: self.on_screen_locked,
            events.SCREEN_UNLOCKED: self.on_screen_unlocked,
            events.DISPLAY_SLEEP: self.on_display_sleep,
            events.DISPLAY_WAKE: self.on_display_wake,
        }
        for event, handler in self._subscriptions.items():
            source.subscribe(event, handler)
        self._state = ControllerState.ACTIVE
        LOGGER.debug("Controller active with %d device(s)", len(self._devices))

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def devices(self) -> tuple[DeviceHandle, ...]:
        return self._devices

    def on_screen_locked(self) -> tuple[OperationResult, ...]:
        LOGGER.info("Screen locked")
        return self._apply(Action.DISCONNECT)

    def on_screen_unlocked(self) -> tuple[OperationResult, ...]:
        LOGGER.info("Screen unlocked")
        return self._apply(Action.CONNECT)

    def on_display_sleep(self) -> None:
        LOGGER.debug("Display asleep")

    def on_display_wake(self) -> None:
        LOGGER.debug("Display awake")

    def close(self) -> None:
        if self._state is ControllerState.DISPOSED:
            return
        for event, handler in self._subscriptions.items():
            self._source.unsubscribe(event, handler)
        self._state = ControllerState.DISPOSED
        LOGGER.debug("Controller disposed")

    def __enter__(self) -> LockStateController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _apply(self, action: Action) -> tuple[OperationResult, ...]:
        with self._lock:
            if self._state is ControllerState.DISPOSED:
                LOGGER.debug("Ignoring %s after close", action.value)
                return ()
            if not self._devices:
                LOGGER.debug("No matched devices to %s", action.value)
                return ()

            results: list[OperationResult] = []
            for device in self._devices:
                results.append(self._run_one(device, action))
            failed = sum(1 for r in results if not r.ok)
            LOGGER.info("%s: %d device(s), %d failed", action.value, len(results), failed)
            return tuple(results)

    def _run_one(self, device: DeviceHandle, action: Action) -> OperationResult:
        try:
            if action is Action.CONNECT:
                return connect_device(device, self._policy)
            return disconnect_device(device)
        except Exception:
            name, address = _identity(device)
            LOGGER.exception("Unexpected error during %s of %s", action.value, address)
            failure = Outcome.CONNECT_FAILED if action is Action.CONNECT else Outcome.DISCONNECT_FAILED
            return OperationResult(
                name=name,
                address=address,
                action=action,
                ok=False,
                reason=failure,
            )


def _identity(device: DeviceHandle) -> tuple[str | None, str]:
    try:
        return device.name, device.address
    except Exception:
        return None, f"<unknown:{id(device):x}>"
