"""Frame info and the coroutine shape shared by primitives and combinators.

An animation coroutine is a plain generator. A bare `yield` hands control
back to whoever drives it (a combinator or the controller); the value the
`yield` evaluates to is the FrameInfo of the tick that resumed it:

    def blink(state):
        while True:
            info = yield
            state.visible.value = not state.visible.value
            info.on_clear(lambda: print("cleared"))

Delegation is `yield from`, so a child's `return` value comes back as the
result of the `yield from` expression.
"""

from __future__ import annotations

from typing import Any, Callable, Generator, Union

ClearCallback = Callable[[], None]


class FrameInfo:
    """What every resumption receives.

    delta_time: milliseconds since the previous tick.
    on_clear: push a callback onto the controller's cleanup stack; it runs
        (most recent first) when the controller is cleared or stopped.
    """

    __slots__ = ("delta_time", "on_clear")

    def __init__(self, delta_time: float, on_clear: Callable[[ClearCallback], None]) -> None:
        self.delta_time = delta_time
        self.on_clear = on_clear

    def __repr__(self) -> str:
        return f"FrameInfo(delta_time={self.delta_time!r})"


Coroutine = Generator[None, FrameInfo, Any]
Input = Union[Coroutine, Callable[[], Coroutine]]


def materialize(animation: Input) -> Coroutine:
    """Call a coroutine factory, or pass an existing coroutine through."""
    return animation() if callable(animation) else animation
