"""Piecewise-linear mapping from one numeric range to another."""

from __future__ import annotations

import math
from typing import Literal, Sequence

Extrapolation = Literal["extend", "clamp", "identity"]


def interpolate(
    value: float,
    input_range: Sequence[float],
    output_range: Sequence[float],
    extrapolate: Extrapolation = "extend",
) -> float:
    """Map `value` from `input_range` onto `output_range`.

    input_range must be monotonic, ascending or descending. Outside it:
    "extend" continues the nearest segment, "clamp" pins to the end output,
    "identity" returns `value` unchanged.

        interpolate(progress.value, [0, 1], [0, 240])
    """
    n = len(input_range)
    if n != len(output_range) or n < 2:
        raise ValueError("input and output ranges must have the same length and at least 2 items")
    if not math.isfinite(value) or not all(math.isfinite(x) for x in (*input_range, *output_range)):
        raise ValueError("all values must be finite numbers")

    ascending = input_range[0] < input_range[-1]
    for a, b in zip(input_range, input_range[1:]):
        if (ascending and a > b) or (not ascending and a < b):
            raise ValueError("input range must be monotonic (all increasing or all decreasing)")

    first, last = input_range[0], input_range[-1]

    def _segment(i: int) -> float:
        x0, x1 = input_range[i], input_range[i + 1]
        y0, y1 = output_range[i], output_range[i + 1]
        if x1 == x0:
            return y0
        return y0 + (value - x0) / (x1 - x0) * (y1 - y0)

    inside = first <= value <= last if ascending else last <= value <= first
    if inside:
        i = 0
        if ascending:
            while i < n - 2 and value > input_range[i + 1]:
                i += 1
        else:
            while i < n - 2 and value < input_range[i + 1]:
                i += 1
        return _segment(i)

    before_start = value < first if ascending else value > first
    if extrapolate == "identity":
        return value
    if extrapolate == "clamp":
        return output_range[0] if before_start else output_range[-1]
    return _segment(0) if before_start else _segment(n - 2)
