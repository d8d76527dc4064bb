"""In-process domain event dispatcher.

Handlers subscribe per event type. Publishing awaits each handler in
subscription order; a failing handler is logged and does not stop the others
or the operation that emitted the event.
"""

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Awaitable[None]]


class EventDispatcher:
    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    async def publish(self, event: Any) -> None:
        for handler in self._handlers.get(type(event), []):
            try:
                await handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, type(event).__name__)

    def handler_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))
