"""Named event channels and an in-process dispatcher."""

from __future__ import annotations

import logging

from btlockctl.backends.base import EventHandler

SCREEN_LOCKED = "screen-locked"
SCREEN_UNLOCKED = "screen-unlocked"
DISPLAY_SLEEP = "display-sleep"
DISPLAY_WAKE = "display-wake"

EVENTS = (SCREEN_LOCKED, SCREEN_UNLOCKED, DISPLAY_SLEEP, DISPLAY_WAKE)

LOGGER = logging.getLogger(__name__)


class EventDispatcher:
    """Synchronous event source keyed by event name.

    Handlers run on the caller's thread in registration order.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event: str, handler: EventHandler) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event '{event}'. Known: {', '.join(EVENTS)}")
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self._handlers.pop(event, None)

    def handlers(self, event: str) -> tuple[EventHandler, ...]:
        return tuple(self._handlers.get(event, ()))

    def emit(self, event: str) -> None:
        handlers = self.handlers(event)
        LOGGER.debug("Dispatching %s to %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler()
