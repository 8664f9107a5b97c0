"""Telemetry analyzer module."""

from .analyzer import MetricNames, TelemetryAnalyzer

__all__ = ["MetricNames", "TelemetryAnalyzer"]
