"""Consumer-side presentation models."""

from dataclasses import dataclass
from enum import Enum


class PlaybackState(str, Enum):
    """Playback loop states."""

    IDLE = "idle"
    DRAINING = "draining"


@dataclass(frozen=True)
class ActivityLevel:
    """A quantized activity bin."""

    name: str  # "low", "medium", "high", "stress"
    value: float  # representative level in [0, 1]
