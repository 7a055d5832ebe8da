"""Easing functions — map normalized time t in [0, 1] to progress.

Plain functions are used directly (easing=linear); the parameterized ones
are factories (easing=poly(4)). in_/out/in_out turn one easing into another:

    timing(state.x, to=100, easing=out(cubic))

Parameters are not validated. Outside [0, 1] the results are whatever the
arithmetic gives.
"""

from __future__ import annotations

import math
from typing import Callable

EasingFunction = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease(t: float) -> float:
    return 4 * t * t if t < 0.5 else (t - 1) * (2 * t - 2) + 1


def quad(t: float) -> float:
    return t * t


def cubic(t: float) -> float:
    return t * t * t


def poly(n: float) -> EasingFunction:
    return lambda t: math.pow(t, n)


def sin(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def circle(t: float) -> float:
    return 1 - math.sqrt(max(0.0, 1 - t * t))


def exp(t: float) -> float:
    return 0 if t == 0 else math.pow(2, 10 * (t - 1))


def elastic(bounciness: float = 1) -> EasingFunction:
    """Spring that overshoots before settling. Higher bounciness, fewer wobbles."""
    return lambda t: math.pow(2, 10 * (t - 1)) * math.sin((t - 1.1) * (2 * math.pi) / bounciness)


def back(s: float = 1.70158) -> EasingFunction:
    """Pulls back below zero before moving forward."""
    return lambda t: t * t * (s * t + 1)


def bounce(t: float) -> float:
    return 1 - abs(1 - t)


def bezier_fn(x1: float, y1: float, x2: float, y2: float) -> EasingFunction:
    """Cubic polynomial through the four control values.

    This evaluates the Bernstein polynomial directly on t instead of solving
    the parametric curve for x, so it is not a CSS cubic-bezier(). Existing
    animations are tuned against this exact curve.
    """

    def _bezier(x: float) -> float:
        return (
            math.pow(1 - x, 3) * x1
            + 3 * math.pow(1 - x, 2) * x * x2
            + 3 * (1 - x) * math.pow(x, 2) * y1
            + math.pow(x, 3) * y2
        )

    return _bezier


class BezierEasing:
    __slots__ = ("_fn",)

    def __init__(self, fn: EasingFunction) -> None:
        self._fn = fn

    def factory(self) -> EasingFunction:
        return self._fn


def bezier(x1: float, y1: float, x2: float, y2: float) -> BezierEasing:
    return BezierEasing(bezier_fn(x1, y1, x2, y2))


def in_(easing: EasingFunction) -> EasingFunction:
    return easing


def out(easing: EasingFunction) -> EasingFunction:
    return lambda t: 1 - easing(1 - t)


def in_out(easing: EasingFunction) -> EasingFunction:
    """Run `easing` forward for the first half and mirrored for the second."""
    return lambda t: easing(t * 2) / 2 if t < 0.5 else 1 - easing((1 - t) * 2) / 2


def steps(n: int = 10, round_: bool = False) -> EasingFunction:
    """Quantize progress to n levels, flooring unless round_ is set."""
    if round_:
        # half-up, not round()'s half-to-even
        return lambda t: math.floor(t * n + 0.5) / n
    return lambda t: math.floor(t * n) / n
