"""OTLP/JSON export request builders."""

import random
import secrets
import time

SERVICE_NAME = "otel-sonifier-sim"
SCOPE = {"name": "sonifier.sim", "version": "0.1.0"}

_OPERATIONS = ["GET /api/users", "POST /api/orders", "db.query", "cache.get", "render"]
_LOG_MESSAGES = ["request served", "cache miss", "retrying upstream", "user logged in"]


def _resource() -> dict:
    return {
        "attributes": [
            {"key": "service.name", "value": {"stringValue": SERVICE_NAME}},
        ]
    }


def _now_ns() -> int:
    return time.time_ns()


def build_traces(error_rate: float, rng: random.Random | None = None) -> dict:
    """One span with a fresh trace id; error status with probability error_rate."""
    rng = rng or random.Random()
    end = _now_ns()
    start = end - rng.randint(1, 500) * 1_000_000
    is_error = rng.random() < error_rate
    span = {
        "traceId": secrets.token_hex(16),
        "spanId": secrets.token_hex(8),
        "name": rng.choice(_OPERATIONS),
        "kind": 2,
        "startTimeUnixNano": str(start),
        "endTimeUnixNano": str(end),
        "status": {"code": 2, "message": "simulated failure"} if is_error else {"code": 1},
    }
    return {
        "resourceSpans": [
            {"resource": _resource(), "scopeSpans": [{"scope": SCOPE, "spans": [span]}]}
        ]
    }


def build_metrics(cpu: float, memory: float, disk_io: float) -> dict:
    """Gauges for cpu/memory (0-1 ratio) and a disk I/O sum scaled by 100."""
    now = str(_now_ns())
    return {
        "resourceMetrics": [
            {
                "resource": _resource(),
                "scopeMetrics": [
                    {
                        "scope": SCOPE,
                        "metrics": [
                            {
                                "name": "system.cpu.utilization",
                                "unit": "1",
                                "gauge": {
                                    "dataPoints": [{"timeUnixNano": now, "asDouble": cpu / 100}]
                                },
                            },
                            {
                                "name": "system.memory.utilization",
                                "unit": "1",
                                "gauge": {
                                    "dataPoints": [
                                        {"timeUnixNano": now, "asDouble": memory / 100}
                                    ]
                                },
                            },
                            {
                                "name": "system.disk.io",
                                "unit": "By",
                                "sum": {
                                    "aggregationTemporality": 2,
                                    "isMonotonic": True,
                                    "dataPoints": [
                                        {"timeUnixNano": now, "asInt": str(int(disk_io * 100))}
                                    ],
                                },
                            },
                        ],
                    }
                ],
            }
        ]
    }


def build_logs(high_severity: float, rng: random.Random | None = None) -> dict:
    """One log record; ERROR severity with probability high_severity."""
    rng = rng or random.Random()
    if rng.random() < high_severity:
        severity_number, severity_text = 17, "ERROR"
    else:
        severity_number, severity_text = 9, "INFO"
    record = {
        "timeUnixNano": str(_now_ns()),
        "severityNumber": severity_number,
        "severityText": severity_text,
        "body": {"stringValue": rng.choice(_LOG_MESSAGES)},
    }
    return {
        "resourceLogs": [
            {"resource": _resource(), "scopeLogs": [{"scope": SCOPE, "logRecords": [record]}]}
        ]
    }
