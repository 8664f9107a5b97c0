"""Summary models derived from a decoded telemetry payload."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TraceRef:
    """One span identifier queued for playback."""

    id: str
    short_id: str
    is_error: bool = False


@dataclass
class TraceAnalysis:
    """Span counts, error rate and durations."""

    count: int = 0
    error_rate: float = 0.0
    average_duration_ms: float = 0.0
    ids: list[TraceRef] = field(default_factory=list)


@dataclass
class MetricAnalysis:
    """Resource levels on a 0-100 scale."""

    cpu: float = 0.0
    memory: float = 0.0
    disk: float = 0.0
    critical: bool = False


@dataclass
class LogAnalysis:
    """Log record counts and error rate."""

    error_rate: float = 0.0
    total_count: int = 0


@dataclass
class AnalyzedTelemetry:
    """Analysis result for one envelope, recomputed per message."""

    traces: TraceAnalysis = field(default_factory=TraceAnalysis)
    metrics: MetricAnalysis = field(default_factory=MetricAnalysis)
    logs: LogAnalysis = field(default_factory=LogAnalysis)

    def to_dict(self) -> dict:
        """Render with the camelCase keys used on the wire."""
        return {
            "traces": {
                "count": self.traces.count,
                "errorRate": self.traces.error_rate,
                "averageDurationMs": self.traces.average_duration_ms,
                "ids": [
                    {"id": ref.id, "shortId": ref.short_id, "isError": ref.is_error}
                    for ref in self.traces.ids
                ],
            },
            "metrics": {
                "cpu": self.metrics.cpu,
                "memory": self.metrics.memory,
                "disk": self.metrics.disk,
                "critical": self.metrics.critical,
            },
            "logs": {
                "errorRate": self.logs.error_rate,
                "totalCount": self.logs.total_count,
            },
        }
