"""Minimal event emitter used for observer notification."""

from collections import defaultdict
from typing import Any, Callable, DefaultDict, List


class EventEmitter:
    """Register callbacks by event name and call them on ``emit``."""

    def __init__(self):
        self._listeners: DefaultDict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Subscribe; returns the callback so it can be used as a decorator."""
        self._listeners[event].append(callback)
        return callback

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, *args, **kwargs) -> None:
        # Copy so a listener may unsubscribe itself
        for callback in list(self._listeners.get(event, [])):
            callback(*args, **kwargs)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))


__all__ = ["EventEmitter"]
