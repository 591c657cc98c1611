"""macOS notification source for screen lock and display power signals."""

from __future__ import annotations

import logging
import signal
from typing import Any

from btlockctl.core import events
from btlockctl.core.errors import BackendUnavailableError
from btlockctl.core.events import EventDispatcher

DISTRIBUTED_NOTIFICATIONS = {
    "com.apple.screenIsLocked": events.SCREEN_LOCKED,
    "com.apple.screenIsUnlocked": events.SCREEN_UNLOCKED,
}
WORKSPACE_NOTIFICATIONS = {
    "NSWorkspaceScreensDidSleepNotification": events.DISPLAY_SLEEP,
    "NSWorkspaceScreensDidWakeNotification": events.DISPLAY_WAKE,
}

LOGGER = logging.getLogger(__name__)


def _import_cocoa() -> tuple[Any, Any, Any, Any]:
    try:
        from AppKit import NSWorkspace  # type: ignore
        from Foundation import NSDistributedNotificationCenter, NSOperationQueue  # type: ignore
        from PyObjCTools import AppHelper  # type: ignore
    except ImportError as exc:
        raise BackendUnavailableError(
            "Screen lock notifications require macOS with 'pyobjc-framework-Cocoa' installed."
        ) from exc
    return NSWorkspace, NSDistributedNotificationCenter, NSOperationQueue, AppHelper


class MacOSNotificationSource(EventDispatcher):
    """Routes Cocoa notifications into named event channels.

    Observers are registered on `start()` and removed on `stop()`; blocks run
    on the main operation queue, i.e. on the thread running `run()`.
    """

    def __init__(self) -> None:
        super().__init__()
        self._observers: list[tuple[Any, Any]] = []

    @property
    def started(self) -> bool:
        return bool(self._observers)

    def start(self) -> None:
        if self._observers:
            return
        NSWorkspace, NSDistributedNotificationCenter, NSOperationQueue, _ = _import_cocoa()
        queue = NSOperationQueue.mainQueue()

        centers = (
            (NSDistributedNotificationCenter.defaultCenter(), DISTRIBUTED_NOTIFICATIONS),
            (NSWorkspace.sharedWorkspace().notificationCenter(), WORKSPACE_NOTIFICATIONS),
        )
        for center, names in centers:
            for name, event in names.items():
                token = center.addObserverForName_object_queue_usingBlock_(
                    name, None, queue, self._forwarder(event)
                )
                self._observers.append((center, token))
        LOGGER.debug("Registered %d notification observer(s)", len(self._observers))

    def stop(self) -> None:
        while self._observers:
            center, token = self._observers.pop()
            center.removeObserver_(token)
        LOGGER.debug("Removed notification observers")

    def run(self) -> None:
        """Run the Cocoa event loop until SIGINT or SIGTERM."""
        _, _, _, AppHelper = _import_cocoa()
        from PyObjCTools import MachSignals  # type: ignore

        MachSignals.signal(signal.SIGTERM, lambda signum: AppHelper.stopEventLoop())
        AppHelper.runConsoleEventLoop(installInterrupt=True)

    def _forwarder(self, event: str) -> Any:
        def _on_notification(notification: Any) -> None:
            try:
                self.emit(event)
            except Exception:
                LOGGER.exception("Handler for %s failed", event)

        return _on_notification
