"""Event hooks whose listeners return values to the emitter.

Themes use these to let plugins contribute HTML at fixed points of a page
without text replacement, and the converter uses them to let plugins
transform the project model.

Usage:
    hooks: EventHooks[str, str] = EventHooks()
    hooks.on("body.end", lambda context: "<script>...</script>")
    fragments = hooks.emit("body.end", context)

Listeners run synchronously in ascending ``order``. If ``R`` is an awaitable
type, ``emit`` returns the awaitables unawaited and the caller decides how to
wait on them.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, TypeVar

from .array import insert_order_sorted

E = TypeVar("E", bound=Hashable)
R = TypeVar("R")


@dataclass(frozen=True)
class _ListenerRecord:
    listener: Callable[..., Any]
    order: int = 0
    once: bool = False


class EventHooks(Generic[E, R]):
    """Ordered listener registry keyed by event name.

    Stored sequences are immutable tuples that get replaced on every change,
    so an ``emit`` in progress keeps dispatching its own snapshot even if a
    listener subscribes or unsubscribes while it runs.
    """

    def __init__(self):
        self._listeners: dict[E, tuple[_ListenerRecord, ...]] = {}

    def on(self, event: E, listener: Callable[..., R], order: int = 0) -> None:
        """Start listening to an event.

        Args:
            event: The event to listen to.
            listener: Called with the event's arguments on every emit.
            order: Lower orders run first. Equal orders run in the order
                they were added.
        """
        self._insert(event, _ListenerRecord(listener, order))

    def once(self, event: E, listener: Callable[..., R], order: int = 0) -> None:
        """Listen to the next occurrence of an event only."""
        self._insert(event, _ListenerRecord(listener, order, once=True))

    def off(self, event: E, listener: Callable[..., R]) -> None:
        """Stop listening to an event.

        Only the first registration of ``listener`` is removed. Unknown
        listeners are ignored. Listeners match by identity, except bound
        methods, which match when they bind the same function to the same
        object: ``off(event, plugin.handle)`` undoes
        ``on(event, plugin.handle)``.
        """
        records = self._listeners.get(event)
        if not records:
            return
        for i, record in enumerate(records):
            if _same_listener(record.listener, listener):
                self._listeners[event] = records[:i] + records[i + 1:]
                return

    def emit(self, event: E, *args: Any) -> list[R]:
        """Call every listener of ``event`` and collect the return values.

        One-shot listeners are unregistered before any listener runs. An
        exception from a listener propagates to the caller.
        """
        snapshot = self._listeners.get(event, ())
        if not snapshot:
            return []
        if any(record.once for record in snapshot):
            self._listeners[event] = tuple(
                record for record in snapshot if not record.once
            )
        return [record.listener(*args) for record in snapshot]

    def listener_count(self, event: E) -> int:
        return len(self._listeners.get(event, ()))

    def has_listeners(self, event: E) -> bool:
        return self.listener_count(event) > 0

    def _insert(self, event: E, record: _ListenerRecord) -> None:
        records = list(self._listeners.get(event, ()))
        insert_order_sorted(records, record)
        self._listeners[event] = tuple(records)


def _same_listener(a: Callable[..., Any], b: Callable[..., Any]) -> bool:
    # Every attribute access creates a new bound method object.
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return a is b
