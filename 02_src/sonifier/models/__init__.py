"""Core data models for the sonifier."""

from .analysis import (
    AnalyzedTelemetry,
    LogAnalysis,
    MetricAnalysis,
    TraceAnalysis,
    TraceRef,
)
from .presentation import ActivityLevel, PlaybackState
from .telemetry import Envelope, Snapshot, TelemetryKind

__all__ = [
    # Telemetry
    "TelemetryKind",
    "Snapshot",
    "Envelope",
    # Analysis
    "AnalyzedTelemetry",
    "TraceAnalysis",
    "TraceRef",
    "MetricAnalysis",
    "LogAnalysis",
    # Presentation
    "ActivityLevel",
    "PlaybackState",
]
