"""Textual integration for motionfx (needs the textual extra).

TextualFrameScheduler ticks animations on the app's own timers, so every
SharedValue write happens on the Textual event loop. bind() pushes value
changes into widgets, guarded against the widget tree being unavailable.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable

from textual.css.query import NoMatches
from textual.timer import Timer

from motionfx.emitter import EventHandle
from motionfx.scheduler import FRAME_INTERVAL
from motionfx.shared import SharedValue

# id(app) for every app inside a pause() block.
_held_apps: set[int] = set()


class TextualFrameScheduler:
    """Frame scheduler backed by set_timer on any Textual message pump."""

    def __init__(self, node: Any, interval: float = FRAME_INTERVAL) -> None:
        self._node = node
        self.interval = interval

    def request_frame(self, callback: Callable[[], None]) -> Timer:
        return self._node.set_timer(self.interval / 1000, callback)

    def cancel_frame(self, handle: Timer) -> None:
        handle.stop()


@contextmanager
def pause(app):
    """Hold back bound effects for one app, e.g. while a screen is rebuilt.

    Changes made inside the block are dropped, not replayed afterwards.
    """
    key = id(app)
    _held_apps.add(key)
    try:
        yield
    finally:
        _held_apps.discard(key)


def is_safe(app) -> bool:
    """True while the app runs and is outside pause()."""
    return bool(app.is_running) and id(app) not in _held_apps


def bind(app, value: SharedValue, effect: Callable[[Any], None]) -> EventHandle:
    """Forward each change of `value` to effect(new_value) on the app's thread.

    Writes made from another thread (a TimerFrameScheduler tick, say) go
    through app.call_from_thread. An effect whose widget is gone
    (NoMatches) is skipped. The returned handle's stop() unbinds.
    """
    owner_thread = threading.get_ident()

    def _apply(new_value):
        try:
            effect(new_value)
        except NoMatches:
            pass

    def _on_change(new_value):
        if not is_safe(app):
            return
        if threading.get_ident() == owner_thread:
            _apply(new_value)
        else:
            app.call_from_thread(_apply, new_value)

    return value.on("change", _on_change)
