"""Atomic animation steps.

Each primitive is a generator meant to be delegated to with `yield from`:

    def intro(state):
        yield from wait(200)
        yield from timing(state.opacity, to=1, duration=400, easing=out(cubic))
        yield from wait_until(state.ready)
"""

from __future__ import annotations

from typing import Callable, Union

from motionfx.easing import EasingFunction, linear
from motionfx.frame import Coroutine, Input, materialize
from motionfx.shared import SharedValue

TimingCallback = Callable[[float], Union[bool, None]]


def time_since_previous_frame() -> Coroutine:
    """Suspend for one tick and return that tick's delta_time."""
    info = yield
    return info.delta_time


def wait(duration: float = 1000) -> Coroutine:
    """Suspend until at least `duration` ms of delta_time has been observed."""
    elapsed = 0
    while elapsed < duration:
        elapsed += yield from time_since_previous_frame()


def wait_until(value: SharedValue[bool], invert: bool = False) -> Coroutine:
    """Suspend every tick while `value` is falsy (truthy with invert=True)."""
    while (value.value if invert else not value.value):
        yield


def delay(duration: float = 1000, animation: Input | None = None) -> Coroutine:
    """wait(duration), then run `animation` if given and return its result."""
    yield from wait(duration)
    if animation is not None:
        return (yield from materialize(animation))


def _write(target: SharedValue[float] | TimingCallback, value: float) -> bool:
    if isinstance(target, SharedValue):
        target.value = value
        return False
    return bool(target(value))


def timing(
    target: SharedValue[float] | TimingCallback,
    *,
    from_: float | None = None,
    to: float = 1,
    easing: EasingFunction = linear,
    delay: float = 0,
    duration: float = 600,
) -> Coroutine:
    """Animate `target` from `from_` to `to` over `duration` ms.

    `target` is a SharedValue, or a callback that receives every value and
    may return True to stop early. For a SharedValue, `from_` defaults to
    its value when the animation starts running.

    The in-flight writes are not clamped, so the last one may fall short of
    (or past) `to`; the animation always ends by writing exactly `to`, also
    when a callback cancels it.
    """
    if from_ is None:
        from_ = target.value if isinstance(target, SharedValue) else 0

    yield from wait(delay)
    yield  # the timed window opens on the next tick

    elapsed = 0
    while elapsed < duration:
        progress = easing(elapsed / duration)
        if _write(target, from_ + (to - from_) * progress):
            break
        elapsed += yield from time_since_previous_frame()

    _write(target, to)
