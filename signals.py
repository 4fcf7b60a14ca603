# signals.py — named, parameterless activation signals between widgets
from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, List

OPEN_MENTOR = "assistant-open-mentor"

Handler = Callable[[], None]


class SignalBus:
    """Tiny publish/subscribe hub. Handlers run synchronously in publish order."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, name: str, handler: Handler) -> Callable[[], None]:
        self._handlers[name].append(handler)

        def _unsubscribe() -> None:
            if handler in self._handlers[name]:
                self._handlers[name].remove(handler)
        return _unsubscribe

    def publish(self, name: str) -> int:
        """Fire `name`; returns how many handlers ran."""
        handlers = list(self._handlers.get(name, ()))
        for h in handlers:
            h()
        return len(handlers)
