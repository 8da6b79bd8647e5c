"""Synchronous in-process notifications for workbench services."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict

__all__ = [
    "Event",
    "EventHandler",
    "EventBus",
    "RECENTLY_OPENED_CHANGED",
    "WINDOW_NAVIGATED",
    "STANDARD_EVENTS",
]

RECENTLY_OPENED_CHANGED = "recently_opened_changed"
WINDOW_NAVIGATED = "window_navigated"

STANDARD_EVENTS = (
    RECENTLY_OPENED_CHANGED,
    WINDOW_NAVIGATED,
)


@dataclass(frozen=True)
class Event:
    name: str
    payload: dict[str, Any]


EventHandler = Callable[[Event], None]


class EventBus:
    """Deliver events to handlers in subscription order.

    A failing handler is logged and does not prevent later handlers from
    running; the emitter never sees listener errors.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._handlers: DefaultDict[str, list[EventHandler]] = defaultdict(list)
        self._logger = logger or logging.getLogger(__name__)

    def on(self, event_name: str, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` and return a callable that unregisters it."""
        self._handlers[event_name].append(handler)

        def _unsubscribe() -> None:
            self.off(event_name, handler)

        return _unsubscribe

    def off(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, payload: dict[str, Any] | None = None) -> None:
        event = Event(event_name, dict(payload or {}))
        for handler in list(self._handlers.get(event_name, ())):
            try:
                handler(event)
            except Exception:
                self._logger.exception("handler for %s failed", event_name)
