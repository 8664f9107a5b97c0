"""TelemetryAnalyzer: summary metrics from a decoded OTLP/JSON payload."""

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterator

from opentelemetry.proto.logs.v1.logs_pb2 import SeverityNumber
from opentelemetry.proto.trace.v1.trace_pb2 import Status

from ..models import (
    AnalyzedTelemetry,
    LogAnalysis,
    MetricAnalysis,
    TraceAnalysis,
    TraceRef,
)

SHORT_ID_LENGTH = 8
DURATION_WINDOW = 100
ERROR_STATUS_CODE = Status.STATUS_CODE_ERROR  # 2
ERROR_SEVERITY = SeverityNumber.SEVERITY_NUMBER_ERROR  # 17
ERROR_SEVERITY_TEXTS = frozenset({"ERROR", "FATAL"})


@dataclass(frozen=True)
class MetricNames:
    """Metric names the analyzer recognizes."""

    cpu: str = "system.cpu.utilization"
    memory: str = "system.memory.utilization"
    disk: str = "system.disk.io"
    disk_divisor: float = 100.0
    critical_threshold: float = 80.0


def _children(node: Any, key: str) -> Iterator[dict]:
    """Yield dict children of node[key], tolerating absent or malformed data."""
    if not isinstance(node, dict):
        return
    items = node.get(key)
    if not isinstance(items, list):
        return
    for item in items:
        if isinstance(item, dict):
            yield item


def _as_int(value: Any) -> int | None:
    """OTLP/JSON encodes 64-bit integers as strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _enum_value(value: Any, enum_type: Any) -> int | None:
    """Accept an enum as integer, numeric string, or enum name."""
    number = _as_int(value)
    if number is not None:
        return number
    if isinstance(value, str):
        try:
            return enum_type.Value(value)
        except ValueError:
            return None
    return None


def _rate(part: int, total: int) -> float:
    return part / total if total > 0 else 0.0


class TelemetryAnalyzer:
    """Derive traces, metrics and logs summaries from one payload.

    The returned summary depends only on the payload. The analyzer also keeps
    a rolling window of the most recent span durations across calls.
    """

    def __init__(self, metric_names: MetricNames | None = None):
        self._names = metric_names or MetricNames()
        self.recent_durations: deque[float] = deque(maxlen=DURATION_WINDOW)

    def analyze(self, payload: Any) -> AnalyzedTelemetry:
        """Analyze all three kinds; absent sections yield zero values."""
        return AnalyzedTelemetry(
            traces=self.analyze_traces(payload),
            metrics=self.analyze_metrics(payload),
            logs=self.analyze_logs(payload),
        )

    def analyze_traces(self, payload: Any) -> TraceAnalysis:
        if not isinstance(payload, dict) or "resourceSpans" not in payload:
            return TraceAnalysis()

        total = 0
        errors = 0
        duration_sum = 0.0
        observed = 0
        ids: list[TraceRef] = []

        for resource_spans in _children(payload, "resourceSpans"):
            for scope_spans in _children(resource_spans, "scopeSpans"):
                for span in _children(scope_spans, "spans"):
                    total += 1

                    status = span.get("status")
                    code = status.get("code") if isinstance(status, dict) else None
                    is_error = _enum_value(code, Status.StatusCode) == ERROR_STATUS_CODE
                    if is_error:
                        errors += 1

                    trace_id = span.get("traceId")
                    if isinstance(trace_id, str) and trace_id:
                        ids.append(
                            TraceRef(
                                id=trace_id,
                                short_id=trace_id[:SHORT_ID_LENGTH],
                                is_error=is_error,
                            )
                        )

                    start = _as_int(span.get("startTimeUnixNano"))
                    end = _as_int(span.get("endTimeUnixNano"))
                    if start and end:
                        duration = (end - start) / 1_000_000
                        self.recent_durations.append(duration)
                        duration_sum += duration
                        observed += 1

        return TraceAnalysis(
            count=total,
            error_rate=_rate(errors, total),
            average_duration_ms=duration_sum / observed if observed else 0.0,
            ids=ids,
        )

    def analyze_metrics(self, payload: Any) -> MetricAnalysis:
        if not isinstance(payload, dict) or "resourceMetrics" not in payload:
            return MetricAnalysis()

        names = self._names
        cpu = memory = disk = 0.0

        for resource_metrics in _children(payload, "resourceMetrics"):
            for scope_metrics in _children(resource_metrics, "scopeMetrics"):
                for metric in _children(scope_metrics, "metrics"):
                    name = metric.get("name")
                    if name in (names.cpu, names.memory):
                        for point in _children(metric.get("gauge"), "dataPoints"):
                            value = _as_float(point.get("asDouble"))
                            if value is None:
                                continue
                            if name == names.cpu:
                                cpu = max(cpu, min(100.0, value * 100))
                            else:
                                memory = max(memory, min(100.0, value * 100))
                    elif name == names.disk:
                        for point in _children(metric.get("sum"), "dataPoints"):
                            value = _as_int(point.get("asInt"))
                            if value is not None:
                                disk = max(disk, min(100.0, value / names.disk_divisor))

        threshold = names.critical_threshold
        return MetricAnalysis(
            cpu=cpu,
            memory=memory,
            disk=disk,
            critical=cpu > threshold or memory > threshold or disk > threshold,
        )

    def analyze_logs(self, payload: Any) -> LogAnalysis:
        if not isinstance(payload, dict) or "resourceLogs" not in payload:
            return LogAnalysis()

        total = 0
        errors = 0
        for resource_logs in _children(payload, "resourceLogs"):
            for scope_logs in _children(resource_logs, "scopeLogs"):
                for record in _children(scope_logs, "logRecords"):
                    total += 1
                    severity = _enum_value(record.get("severityNumber"), SeverityNumber)
                    if record.get("severityText") in ERROR_SEVERITY_TEXTS or (
                        severity is not None and severity >= ERROR_SEVERITY
                    ):
                        errors += 1

        return LogAnalysis(error_rate=_rate(errors, total), total_count=total)
