"""Activity profiles for the synthetic load generator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoadProfile:
    """Emission rates and levels for one activity profile."""

    name: str
    duration: float  # seconds
    trace_interval: float  # seconds between trace exports
    metric_interval: float
    log_interval: float
    error_rate: float  # share of spans with error status
    high_severity: float  # share of ERROR log records
    max_cpu: float  # percent
    max_memory: float
    max_disk_io: float


PROFILES: dict[str, LoadProfile] = {
    "low": LoadProfile(
        name="low",
        duration=30.0,
        trace_interval=5.0,
        metric_interval=5.0,
        log_interval=3.0,
        error_rate=0.05,
        high_severity=0.1,
        max_cpu=10.0,
        max_memory=10.0,
        max_disk_io=10.0,
    ),
    "medium": LoadProfile(
        name="medium",
        duration=60.0,
        trace_interval=0.1,
        metric_interval=2.0,
        log_interval=1.0,
        error_rate=0.15,
        high_severity=0.3,
        max_cpu=30.0,
        max_memory=30.0,
        max_disk_io=30.0,
    ),
    "high": LoadProfile(
        name="high",
        duration=90.0,
        trace_interval=0.01,
        metric_interval=0.5,
        log_interval=0.2,
        error_rate=0.35,
        high_severity=0.6,
        max_cpu=60.0,
        max_memory=60.0,
        max_disk_io=60.0,
    ),
    "stress": LoadProfile(
        name="stress",
        duration=120.0,
        trace_interval=0.001,
        metric_interval=0.5,
        log_interval=0.1,
        error_rate=0.5,
        high_severity=0.8,
        max_cpu=100.0,
        max_memory=100.0,
        max_disk_io=100.0,
    ),
}


def get_profile(name: str) -> LoadProfile:
    """Look up a profile by name (case-insensitive)."""
    try:
        return PROFILES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown profile {name!r}; expected one of {', '.join(PROFILES)}"
        ) from None
