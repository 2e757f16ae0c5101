"""
Synchronous event channel for access lifecycle notifications.

Listeners run inside the emitting call, in registration order, and receive
the mutable AccessContext of the operation. Exceptions raised by a listener
propagate to the caller of the operation.
"""

from collections.abc import Callable
from typing import Any

Listener = Callable[[Any], Any]


class EventChannel:
    """
    Minimal publish/subscribe registry keyed by event name.

    Example:
        events = EventChannel()
        detach = events.on("get", lambda ctx: print(ctx.key))
        events.emit("get", context)
        detach()
    """

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Callable[[], bool]:
        """
        Subscribe ``listener`` to ``event``.

        Returns:
            A callable that removes this subscription again.
        """
        if not callable(listener):
            raise TypeError(f"Listener for '{event}' must be callable, got {type(listener)}")
        self._listeners.setdefault(event, []).append(listener)
        return lambda: self.off(event, listener)

    def once(self, event: str, listener: Listener) -> Callable[[], bool]:
        """Subscribe ``listener`` for a single delivery of ``event``."""

        def _once(context: Any) -> Any:
            self.off(event, _once)
            return listener(context)

        return self.on(event, _once)

    def off(self, event: str, listener: Listener) -> bool:
        """Remove one subscription. Returns False if it was not registered."""
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return False
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event]
        return True

    def emit(self, event: str, context: Any) -> int:
        """
        Deliver ``context`` to every listener of ``event``.

        Returns:
            Number of listeners called
        """
        # Snapshot so listeners may unsubscribe while being called.
        listeners = tuple(self._listeners.get(event, ()))
        for listener in listeners:
            listener(context)
        return len(listeners)

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, ()))
        return sum(len(listeners) for listeners in self._listeners.values())

    def clear(self, event: str | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)
