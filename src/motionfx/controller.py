"""Animation controller — drives one coroutine frame by frame.

create() pairs a generator function with a SharedValues state group:

    def fade_in(state):
        yield from timing(state.opacity, to=1, duration=300)

    anim = create(fade_in, {"opacity": 0})
    anim.state.opacity.on("change", render)
    anim.start()

Lifecycle: IDLE --start()--> RUNNING <--pause()/resume()--> PAUSED, and
stop() from anywhere back to IDLE with the state reset. The coroutine is
created lazily on the first tick, and dropped when it finishes.

An exception escaping the coroutine is logged and ends the run. It never
propagates to start(), resume() or the frame scheduler.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from typing import Any, Callable, Mapping

from motionfx.frame import ClearCallback, Coroutine, FrameInfo
from motionfx.scheduler import FrameScheduler, ManualFrameScheduler, default_scheduler
from motionfx.shared import SharedValues, StateView

logger = logging.getLogger("motionfx.controller")

AnimationFn = Callable[[StateView], Coroutine]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class AnimationStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class Animation:
    """Owns the coroutine, the pending frame, and the cleanup stack."""

    def __init__(
        self,
        animation: AnimationFn,
        state: Mapping[str, Any] | None = None,
        *,
        scheduler: FrameScheduler | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._animation = animation
        self.values = SharedValues(state)
        self._scheduler = scheduler
        self._clock = clock

        self._generator: Coroutine | None = None
        self._primed = False
        self._frame: Any = None
        self._frame_token = 0
        self._last_time = 0.0
        self._status = AnimationStatus.IDLE
        self._clear_callbacks: list[ClearCallback] = []
        self._lock = threading.RLock()
        self._ticking = False

    @property
    def state(self) -> StateView:
        return self.values.current

    @property
    def status(self) -> AnimationStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is AnimationStatus.RUNNING

    # ─── Frame loop ─────────────────────────────────────────────────────────

    def _ensure_scheduler(self) -> FrameScheduler:
        if self._scheduler is None:
            self._scheduler = default_scheduler()
        return self._scheduler

    def _now(self) -> float:
        """Milliseconds on the clock the frames are scheduled against."""
        if self._clock is not None:
            return self._clock()
        if isinstance(self._scheduler, ManualFrameScheduler):
            return self._scheduler.now()
        return _monotonic_ms()

    def _request_frame(self) -> None:
        self._ensure_scheduler()
        self._frame_token += 1
        token = self._frame_token
        self._frame = self._scheduler.request_frame(lambda: self._tick(token))

    def _cancel_frame(self) -> None:
        self._frame_token += 1
        if self._frame is not None:
            self._scheduler.cancel_frame(self._frame)
            self._frame = None

    def _on_clear(self, callback: ClearCallback) -> None:
        self._clear_callbacks.append(callback)

    def _tick(self, token: int) -> None:
        with self._lock:
            if token != self._frame_token:
                return  # cancelled after the scheduler had already fired it
            self._frame = None
            if self._status is not AnimationStatus.RUNNING:
                return

            now = self._now()
            delta = now - self._last_time
            self._last_time = now

            generator = None
            finished = False
            self._ticking = True
            try:
                if self._generator is None:
                    self._generator = self._animation(self.state)
                    self._primed = False
                generator = self._generator
                if self._primed:
                    generator.send(FrameInfo(delta, self._on_clear))
                else:
                    self._primed = True
                    next(generator)
            except StopIteration:
                finished = True
            except Exception:
                logger.exception("Animation generator raised")
                finished = True
            finally:
                self._ticking = False

            if self._generator is not generator:
                return  # stopped or restarted from inside the coroutine
            if finished:
                self._generator = None
                self._status = AnimationStatus.IDLE
                logger.debug("Animation %s finished", self._name)
            elif self._status is AnimationStatus.RUNNING:
                self._request_frame()

    def _close_generator(self) -> None:
        generator, self._generator = self._generator, None
        if generator is not None and not self._ticking:
            try:
                generator.close()
            except Exception:
                logger.exception("Animation generator raised while closing")

    @property
    def _name(self) -> str:
        return getattr(self._animation, "__name__", repr(self._animation))

    # ─── Lifecycle ──────────────────────────────────────────────────────────

    def start(self) -> None:
        """Reset the state group and run the animation from the beginning."""
        with self._lock:
            self._cancel_frame()
            self._close_generator()
            self.values.clear()
            self._ensure_scheduler()
            self._last_time = self._now()
            self._status = AnimationStatus.RUNNING
            logger.debug("Animation %s started", self._name)
            self._request_frame()

    def pause(self) -> None:
        with self._lock:
            if self._status is not AnimationStatus.RUNNING:
                return
            self._status = AnimationStatus.PAUSED
            self._cancel_frame()

    def resume(self) -> None:
        """Continue a paused animation. Time spent paused is not observed."""
        with self._lock:
            if self._status is not AnimationStatus.PAUSED:
                return
            self._status = AnimationStatus.RUNNING
            self._last_time = self._now()
            self._request_frame()

    def play(self) -> None:
        """resume() when paused, start() when idle."""
        with self._lock:
            if self._status is AnimationStatus.PAUSED:
                self.resume()
            elif self._status is AnimationStatus.IDLE:
                self.start()

    def clear(self) -> None:
        """Reset the state group and run the on_clear callbacks, newest first."""
        with self._lock:
            self.values.clear()
            while self._clear_callbacks:
                callback = self._clear_callbacks.pop()
                try:
                    callback()
                except Exception:
                    logger.exception("on_clear callback raised")

    def stop(self) -> None:
        with self._lock:
            self._cancel_frame()
            self._status = AnimationStatus.IDLE
            self._close_generator()
            self._last_time = self._now()
            self.clear()
            logger.debug("Animation %s stopped", self._name)

    def restart(self) -> None:
        with self._lock:
            self.stop()
            self.start()

    def __repr__(self) -> str:
        return f"Animation({self._name}, {self._status.value})"


def create(
    animation: AnimationFn,
    state: Mapping[str, Any] | None = None,
    *,
    scheduler: FrameScheduler | None = None,
    clock: Callable[[], float] | None = None,
) -> Animation:
    """Build an Animation controller. Nothing runs until start()."""
    return Animation(animation, state, scheduler=scheduler, clock=clock)
