"""Activity smoothing and hysteretic level quantization."""

from dataclasses import dataclass, field

from ..models import ActivityLevel

LOW = ActivityLevel(name="low", value=0.1)
MEDIUM = ActivityLevel(name="medium", value=0.3)
HIGH = ActivityLevel(name="high", value=0.6)
STRESS = ActivityLevel(name="stress", value=1.0)


def _default_levels() -> tuple[ActivityLevel, ...]:
    return (LOW, MEDIUM, HIGH, STRESS)


@dataclass(frozen=True)
class LevelConfig:
    """Bin edges between consecutive levels (len(levels) - 1 of them)."""

    thresholds: tuple[float, ...] = (0.2, 0.45, 0.8)
    levels: tuple[ActivityLevel, ...] = field(default_factory=_default_levels)
    decay: float = 0.95
    floor: float = 0.1

    def __post_init__(self):
        if len(self.thresholds) != len(self.levels) - 1:
            raise ValueError("LevelConfig needs one threshold fewer than levels")
        if list(self.thresholds) != sorted(self.thresholds):
            raise ValueError("LevelConfig thresholds must be ascending")


class LevelQuantizer:
    """Snap a continuous value to a level; report only level changes."""

    def __init__(self, config: LevelConfig | None = None):
        self._config = config or LevelConfig()
        self.current: ActivityLevel | None = None

    def bin_for(self, value: float) -> ActivityLevel:
        for threshold, level in zip(self._config.thresholds, self._config.levels):
            if value < threshold:
                return level
        return self._config.levels[-1]

    def update(self, value: float) -> ActivityLevel | None:
        """Return the new level when value lands in a different bin, else None."""
        level = self.bin_for(value)
        if level == self.current:
            return None
        self.current = level
        return level


class ActivitySmoother:
    """Exponentially decaying maximum with a floor."""

    def __init__(self, decay: float = 0.95, floor: float = 0.1):
        self._decay = decay
        self._floor = floor
        self.value = 0.0

    def update(self, sample: float) -> float:
        self.value = max(self.value * self._decay, sample, self._floor)
        return self.value
