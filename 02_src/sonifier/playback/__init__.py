"""Adaptive playback module."""

from .levels import ActivitySmoother, LevelConfig, LevelQuantizer
from .queue import PlaybackQueue
from .rate import PlaybackConfig, RateBand, RateController
from .scheduler import AsyncioScheduler, IScheduler, ManualScheduler

__all__ = [
    "ActivitySmoother",
    "AsyncioScheduler",
    "IScheduler",
    "LevelConfig",
    "LevelQuantizer",
    "ManualScheduler",
    "PlaybackConfig",
    "PlaybackQueue",
    "RateBand",
    "RateController",
]
