"""Named-event publish/subscribe.

Synchronous, in-order dispatch to the listeners registered when emit() is
called. No buffering, no backpressure. SharedValue and SharedValues deliver
their notifications through this class.

emit_once() latches an event: listeners added afterwards fire immediately
with the latched arguments, and the event can never be emitted again.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable

Callback = Callable[..., Any]


class EventHandle:
    """Returned by on(). stop() removes the listener; calling it twice is harmless."""

    __slots__ = ("_emitter", "_event", "_callback")

    def __init__(self, emitter: EventEmitter, event: str, callback: Callback) -> None:
        self._emitter = emitter
        self._event = event
        self._callback = callback

    def stop(self) -> None:
        self._emitter.off(self._event, self._callback)

    def remove(self) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"EventHandle({self._event!r})"


class _Subscription:
    __slots__ = ("event", "callback", "once")

    def __init__(self, event: str, callback: Callback, once: bool) -> None:
        self.event = event
        self.callback = callback
        self.once = once


class EventEmitter:
    """Synchronous named-event dispatcher."""

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []
        self._latched: dict[str, tuple] = {}

    def on(self, event: str, callback: Callback) -> EventHandle:
        """Register a listener. A latched event fires it immediately instead."""
        if event in self._latched:
            callback(*self._latched[event])
        else:
            self._subscriptions.append(_Subscription(event, callback, once=False))
        return EventHandle(self, event, callback)

    def off(self, event: str, callback: Callback | None = None) -> EventEmitter:
        """Remove `callback` from `event`, or every listener of `event`."""
        self._subscriptions = [
            s for s in self._subscriptions
            if s.event != event or (callback is not None and s.callback != callback)
        ]
        return self

    def once(self, event: str, callback: Callback | None = None) -> Future:
        """Listen for a single emission.

        The returned Future resolves with the callback's return value, or
        None when no callback was given.
        """
        future: Future = Future()

        def _listener(*args):
            try:
                result = callback(*args) if callback is not None else None
            except BaseException as exc:
                future.set_exception(exc)
                raise
            future.set_result(result)

        if event in self._latched:
            _listener(*self._latched[event])
        else:
            self._subscriptions.append(_Subscription(event, _listener, once=True))
        return future

    def off_once(self, event: str, callback: Callback | None = None) -> EventEmitter:
        """Remove one-shot listeners of `event`. Persistent listeners are kept."""
        self._subscriptions = [
            s for s in self._subscriptions
            if s.event != event or not s.once or (callback is not None and s.callback != callback)
        ]
        return self

    def emit(self, event: str, *args) -> EventEmitter:
        """Call every listener of `event` with `args`, in subscription order."""
        if event in self._latched:
            raise RuntimeError(f'Event "{event}" was supposed to be emitted only once')
        for sub in list(self._subscriptions):
            if sub.event != event:
                continue
            if sub.once:
                try:
                    self._subscriptions.remove(sub)
                except ValueError:
                    continue  # already consumed by a re-entrant emit
            sub.callback(*args)
        return self

    def emit_once(self, event: str, *args) -> EventEmitter:
        """Emit, then latch the arguments for every future subscriber."""
        self.emit(event, *args)
        self._latched[event] = args
        self.off(event)
        return self

    def pipe(self, event: str, other: EventEmitter) -> EventHandle:
        """Re-emit `event` on `other` every time it fires here."""
        return self.on(event, lambda *args: other.emit(event, *args))

    def pipe_once(self, event: str, other: EventEmitter) -> Future:
        """Forward the next emission of `event` to `other` as a latched event."""
        return self.once(event, lambda *args: other.emit_once(event, *args))

    def clear_events(self) -> None:
        self._subscriptions.clear()
        self._latched.clear()

    def listener_count(self, event: str) -> int:
        return sum(1 for s in self._subscriptions if s.event == event)
