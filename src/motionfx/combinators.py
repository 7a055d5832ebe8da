"""Structural composition of animation coroutines.

Every combinator takes coroutines or zero-argument factories and
materializes them once, in declaration order, when the combinator itself
starts running. "Parallel" is cooperative: each child is advanced in turn
inside the same tick, always in declaration order.

    def scene(state):
        yield from parallel(
            timing(state.x, to=100),
            sequence(100, timing(state.y, to=50), timing(state.y, to=0)),
        )
        yield from loop(3, lambda i: timing(state.scale, to=1 + i))

Nothing here catches exceptions; they reach the controller.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from motionfx.frame import Coroutine, FrameInfo, Input, materialize
from motionfx.primitives import wait


def _advance(coroutine: Coroutine, info: FrameInfo | None) -> tuple[bool, Any]:
    """Resume once. info=None primes a coroutine that has not started."""
    try:
        coroutine.send(info)
    except StopIteration as stop:
        return True, stop.value
    return False, None


def parallel(*animations: Input) -> Coroutine:
    """Run every child until all have finished. Returns their results in order."""
    coroutines = [materialize(a) for a in animations]
    results: list[Any] = [None] * len(coroutines)
    pending = list(range(len(coroutines)))
    info = None
    while True:
        still_pending = []
        for index in pending:
            done, result = _advance(coroutines[index], info)
            if done:
                results[index] = result
            else:
                still_pending.append(index)
        pending = still_pending
        if not pending:
            return results
        info = yield


all_ = parallel


def any_(*animations: Input) -> Coroutine:
    """Run every child until the first one finishes and return its result.

    Children after the winner are not advanced in the winning tick. The
    losers are simply no longer driven; they get no cancellation, so any
    cleanup they registered with on_clear waits for the controller.
    """
    coroutines = [materialize(a) for a in animations]
    if not coroutines:
        return None
    info = None
    while True:
        for coroutine in coroutines:
            done, result = _advance(coroutine, info)
            if done:
                return result
        info = yield


def chain(*animations: Input) -> Coroutine:
    """Run children one after another. Returns their results in order."""
    coroutines = [materialize(a) for a in animations]
    results = []
    for coroutine in coroutines:
        results.append((yield from coroutine))
    return results


def sequence(delay_ms: float, *animations: Input) -> Coroutine:
    """chain() with a wait(delay_ms) between consecutive children."""
    coroutines = [materialize(a) for a in animations]
    results = []
    for index, coroutine in enumerate(coroutines):
        if index:
            yield from wait(delay_ms)
        results.append((yield from coroutine))
    return results


def _after(delay_ms: float, coroutine: Coroutine) -> Coroutine:
    yield from wait(delay_ms)
    return (yield from coroutine)


def stagger(delay_ms: float, *animations: Input) -> Coroutine:
    """parallel() where child i starts after delay_ms * i."""
    coroutines = [materialize(a) for a in animations]
    return (yield from parallel(*(_after(delay_ms * i, c) for i, c in enumerate(coroutines))))


def loop(iterations: float | Callable[[int], Coroutine], factory: Callable[[int], Coroutine] | None = None) -> Coroutine:
    """Run factory(i) to completion for i = 0, 1, ... iterations - 1.

    loop(factory) repeats forever.
    """
    if factory is None:
        iterations, factory = math.inf, iterations
    i = 0
    while i < iterations:
        yield from factory(i)
        i += 1
