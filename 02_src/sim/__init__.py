"""Synthetic telemetry producer."""

from .profiles import PROFILES, LoadProfile, get_profile
from .sim import ILoadGenerator, LoadGenerator

__all__ = ["ILoadGenerator", "LoadGenerator", "LoadProfile", "PROFILES", "get_profile"]
