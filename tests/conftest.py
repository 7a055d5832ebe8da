import pytest

from motionfx import FrameInfo


class Driver:
    """Steps a coroutine by hand: primed on construction, one tick per call."""

    def __init__(self, coroutine):
        self.coroutine = coroutine
        self.done = False
        self.result = None
        self.cleanups = []
        self.ticks = 0
        self._advance(None)

    def _advance(self, info):
        try:
            self.coroutine.send(info)
        except StopIteration as stop:
            self.done = True
            self.result = stop.value

    def tick(self, delta=16):
        assert not self.done, "coroutine already finished"
        self.ticks += 1
        self._advance(FrameInfo(delta, self.cleanups.append))

    def run(self, delta=16, limit=10_000):
        """Tick until finished. Returns the number of ticks taken."""
        start = self.ticks
        while not self.done:
            assert self.ticks - start < limit, "coroutine never finished"
            self.tick(delta)
        return self.ticks - start


@pytest.fixture
def drive():
    return Driver
