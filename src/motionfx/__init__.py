"""motionfx: generator-driven animations over observable shared values."""

from importlib.metadata import version as _version

__version__ = _version("motionfx")

from motionfx import easing
from motionfx.emitter import EventEmitter, EventHandle
from motionfx.shared import SharedValue, SharedValues, StateView
from motionfx.interpolate import interpolate
from motionfx.frame import FrameInfo, materialize
from motionfx.scheduler import (
    FRAME_INTERVAL,
    AsyncioFrameScheduler,
    ManualFrameScheduler,
    TimerFrameScheduler,
    set_scheduler,
)
from motionfx.primitives import time_since_previous_frame, timing, wait, wait_until, delay
from motionfx.combinators import parallel, all_, any_, chain, sequence, stagger, loop
from motionfx.controller import Animation, AnimationStatus, create
# textual NOT auto-imported — opt-in only

__all__ = [
    "easing",
    "EventEmitter",
    "EventHandle",
    "SharedValue",
    "SharedValues",
    "StateView",
    "interpolate",
    "FrameInfo",
    "materialize",
    "FRAME_INTERVAL",
    "AsyncioFrameScheduler",
    "ManualFrameScheduler",
    "TimerFrameScheduler",
    "set_scheduler",
    "time_since_previous_frame",
    "timing",
    "wait",
    "wait_until",
    "delay",
    "parallel",
    "all_",
    "any_",
    "chain",
    "sequence",
    "stagger",
    "loop",
    "Animation",
    "AnimationStatus",
    "create",
]
