"""Queue-depth driven playback rate control."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RateBand:
    """Queues at least min_depth deep play at delay_ms per item."""

    min_depth: int
    delay_ms: float


def _default_bands() -> tuple[RateBand, ...]:
    return (
        RateBand(min_depth=201, delay_ms=1.0),
        RateBand(min_depth=100, delay_ms=2.0),
        RateBand(min_depth=50, delay_ms=5.0),
        RateBand(min_depth=20, delay_ms=10.0),
    )


@dataclass(frozen=True)
class PlaybackConfig:
    """Tunable pacing constants.

    Depth 0-4 plays at twice the base delay, 5-19 at the base delay, and
    deeper queues use the first band whose min_depth they reach.
    """

    base_delay_ms: float = 20.0
    low_water: int = 5
    low_water_factor: float = 2.0
    bands: tuple[RateBand, ...] = field(default_factory=_default_bands)


class RateController:
    """Maps queue depth to the delay before the next playback tick."""

    def __init__(self, config: PlaybackConfig | None = None):
        self._config = config or PlaybackConfig()
        self._bands = tuple(
            sorted(self._config.bands, key=lambda band: band.min_depth, reverse=True)
        )
        self.delay_ms = self.delay_for(0)

    @property
    def config(self) -> PlaybackConfig:
        return self._config

    def delay_for(self, depth: int) -> float:
        for band in self._bands:
            if depth >= band.min_depth:
                return band.delay_ms
        if depth < self._config.low_water:
            return self._config.base_delay_ms * self._config.low_water_factor
        return self._config.base_delay_ms

    def update(self, depth: int) -> float:
        """Recompute and remember the delay for the current depth."""
        self.delay_ms = self.delay_for(depth)
        return self.delay_ms
