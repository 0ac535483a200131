from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

_LOGGER = logging.getLogger("P2W.Events")

EventHandler = Callable[..., Any]


class EventDispatcher:
    """Synchronous event fan-out.

    Handlers for an event run one at a time, in registration order, each to
    completion. A failing handler is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = {}

    def register(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def unregister(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            self._handlers.pop(event, None)

    def handlers(self, event: str) -> List[EventHandler]:
        return list(self._handlers.get(event, ()))

    def dispatch(self, event: str, *args: Any) -> int:
        invoked = 0
        for handler in self.handlers(event):
            invoked += 1
            try:
                handler(event, *args)
            except Exception as exc:
                _LOGGER.exception("Handler for %s failed: %s", event, exc)
        return invoked
