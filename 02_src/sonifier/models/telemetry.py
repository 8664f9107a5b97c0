"""Telemetry classification and envelope models."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class TelemetryKind(str, Enum):
    """Classification of an ingested payload."""

    TRACES = "traces"
    METRICS = "metrics"
    LOGS = "logs"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Snapshot:
    """The most recent normalized ingestion result."""

    kind: TelemetryKind
    payload: Any  # JSON-compatible tree, or a string for undecodable input


@dataclass(frozen=True)
class Envelope:
    """Message unit pushed to subscribers and returned by the pull endpoint."""

    type: TelemetryKind
    payload: Any

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "Envelope":
        return cls(type=snapshot.kind, payload=snapshot.payload)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "payload": self.payload}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))
