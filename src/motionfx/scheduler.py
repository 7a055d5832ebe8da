"""Frame scheduling — when the controller's next tick runs.

A scheduler only needs request_frame(callback) -> handle and
cancel_frame(handle). Each controller keeps at most one outstanding handle.

Default selection mirrors a browser's requestAnimationFrame-with-fallback:
use the running asyncio loop when there is one, otherwise a fixed-rate
daemon timer. Install a process-wide default once with set_scheduler():

    motionfx.set_scheduler(TextualFrameScheduler(app))

Controllers created with an explicit scheduler= ignore the default.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import threading
from typing import Any, Callable, Protocol

FRAME_INTERVAL = 16  # ms, ~60 fps

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


class AsyncioFrameScheduler:
    """Runs frames on an asyncio event loop via call_later."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None, interval: float = FRAME_INTERVAL) -> None:
        self._loop = loop
        self.interval = interval

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        return self.loop.call_later(self.interval / 1000, callback)

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class TimerFrameScheduler:
    """Fixed-rate fallback on daemon threading.Timer threads.

    Ticks run on the timer thread. Only one frame is outstanding per
    controller, so a controller's ticks never overlap.
    """

    def __init__(self, interval: float = FRAME_INTERVAL) -> None:
        self.interval = interval

    def request_frame(self, callback: FrameCallback) -> threading.Timer:
        timer = threading.Timer(self.interval / 1000, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel_frame(self, handle: threading.Timer) -> None:
        handle.cancel()


class ManualFrameScheduler:
    """Virtual-time scheduler for deterministic stepping.

    Time only moves when advance() or step() is called. A frame requested
    at virtual time t is due at t + interval. Pass now as the controller's
    clock (create() does this automatically when no clock is given).

        frames = ManualFrameScheduler()
        anim = create(fade, {"opacity": 0}, scheduler=frames)
        anim.start()
        frames.advance(500)
    """

    def __init__(self, interval: float = FRAME_INTERVAL) -> None:
        self.interval = interval
        self._now: float = 0
        self._queue: list[tuple[float, int, FrameCallback]] = []
        self._cancelled: set[int] = set()
        self._ids = itertools.count(1)

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        heapq.heappush(self._queue, (self._now + self.interval, handle, callback))
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._cancelled.add(handle)

    def _pop_due(self, until: float | None) -> tuple[float, FrameCallback] | None:
        while self._queue:
            due, handle, callback = self._queue[0]
            if until is not None and due > until:
                return None
            heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            return due, callback
        return None

    def advance(self, ms: float) -> int:
        """Move virtual time forward by ms, firing every frame that falls due.

        Returns the number of frames fired.
        """
        target = self._now + ms
        fired = 0
        while (entry := self._pop_due(target)) is not None:
            self._now, callback = entry
            callback()
            fired += 1
        self._now = target
        return fired

    def step(self, frames: int = 1) -> int:
        """Jump straight to and fire the next `frames` frames."""
        fired = 0
        for _ in range(frames):
            entry = self._pop_due(None)
            if entry is None:
                break
            self._now, callback = entry
            callback()
            fired += 1
        return fired


_default: FrameScheduler | None = None


def set_scheduler(scheduler: FrameScheduler | None) -> None:
    """Install (or with None, remove) the process-wide default scheduler.

    Controllers without a clock= follow a ManualFrameScheduler's virtual
    time whether it was passed as scheduler= or installed here.
    """
    global _default
    _default = scheduler


def default_scheduler() -> FrameScheduler:
    """The installed default, else asyncio if a loop is running, else a timer."""
    if _default is not None:
        return _default
    try:
        return AsyncioFrameScheduler(asyncio.get_running_loop())
    except RuntimeError:
        return TimerFrameScheduler()
