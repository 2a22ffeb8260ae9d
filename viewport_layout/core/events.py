"""Notification sink for layout lifecycle events.

Listeners subscribe with ``on(event_type, handler)`` and receive a payload
dict. Handlers run synchronously in subscription order; a failing handler
is logged and does not prevent later handlers from running.
"""

import logging
from typing import Any, Callable, Dict, List, Protocol, Union

from ..models.events import LayoutEventType

logger = logging.getLogger(__name__)

EventHandler = Callable[[Dict[str, Any]], None]


class NotificationSink(Protocol):
    """Capability consumed by the registries and the workspace."""

    def on(self, event_type: LayoutEventType, handler: EventHandler) -> None: ...

    def off(self, event_type: LayoutEventType, handler: EventHandler) -> None: ...

    def emit(self, event_type: LayoutEventType, payload: Dict[str, Any]) -> None: ...


class EventEmitter:
    """In-process event emitter."""

    def __init__(self) -> None:
        self._handlers: Dict[LayoutEventType, List[EventHandler]] = {}

    def on(self, event_type: Union[LayoutEventType, str], handler: EventHandler) -> None:
        """Subscribe ``handler``; subscribing the same handler twice is a no-op."""
        handlers = self._handlers.setdefault(LayoutEventType(event_type), [])
        if handler not in handlers:
            handlers.append(handler)

    def off(self, event_type: Union[LayoutEventType, str], handler: EventHandler) -> None:
        """Unsubscribe ``handler`` if subscribed."""
        handlers = self._handlers.get(LayoutEventType(event_type), [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_type: Union[LayoutEventType, str], payload: Dict[str, Any]) -> None:
        """Deliver ``payload`` to every handler of ``event_type``."""
        event_type = LayoutEventType(event_type)
        # Copy so handlers may unsubscribe while being notified
        for handler in list(self._handlers.get(event_type, [])):
            try:
                handler(payload)
            except Exception as e:
                name = getattr(handler, "__name__", repr(handler))
                logger.error(f"Event handler {name} failed for {event_type.value}: {e}")

    def handler_count(self, event_type: Union[LayoutEventType, str]) -> int:
        return len(self._handlers.get(LayoutEventType(event_type), []))
