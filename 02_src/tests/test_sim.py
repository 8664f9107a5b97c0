"""Tests for the synthetic load generator."""

import asyncio
import json
import random

import httpx
import pytest

from sim import PROFILES, LoadGenerator, get_profile
from sim.payloads import build_logs, build_metrics, build_traces
from sonifier.analyzer import TelemetryAnalyzer
from sonifier.models import TelemetryKind
from sonifier.normalizer import classify_document


class TestProfiles:
    """Tests for profile lookup."""

    def test_known_profiles(self):
        assert set(PROFILES) == {"low", "medium", "high", "stress"}

    def test_lookup_is_case_insensitive(self):
        assert get_profile("HIGH").name == "high"

    def test_unknown_profile(self):
        with pytest.raises(ValueError):
            get_profile("extreme")

    def test_profiles_escalate(self):
        """Test that each profile emits traces faster than the previous one."""
        intervals = [PROFILES[name].trace_interval for name in ("low", "medium", "high", "stress")]
        assert intervals == sorted(intervals, reverse=True)


class TestPayloads:
    """Tests for OTLP/JSON builders."""

    def test_traces_shape(self):
        payload = build_traces(0.0, random.Random(1))
        span = payload["resourceSpans"][0]["scopeSpans"][0]["spans"][0]

        assert classify_document(payload) is TelemetryKind.TRACES
        assert len(span["traceId"]) == 32
        assert len(span["spanId"]) == 16
        assert span["status"]["code"] == 1

    def test_traces_error_status(self):
        payload = build_traces(1.0, random.Random(1))
        analysis = TelemetryAnalyzer().analyze_traces(payload)

        assert analysis.count == 1
        assert analysis.error_rate == 1.0

    def test_metrics_round_trip_through_analyzer(self):
        """Test that generated metrics read back at their percent levels."""
        payload = build_metrics(60.0, 30.0, 10.0)
        analysis = TelemetryAnalyzer().analyze_metrics(payload)

        assert classify_document(payload) is TelemetryKind.METRICS
        assert analysis.cpu == pytest.approx(60.0)
        assert analysis.memory == pytest.approx(30.0)
        assert analysis.disk == pytest.approx(10.0)
        assert analysis.critical is False

    def test_logs_severity(self):
        errors = TelemetryAnalyzer().analyze_logs(build_logs(1.0, random.Random(1)))
        info = TelemetryAnalyzer().analyze_logs(build_logs(0.0, random.Random(1)))

        assert errors.error_rate == 1.0
        assert info.error_rate == 0.0
        assert info.total_count == 1


def recording_factory(requests: list, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code)

    return lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestLoadGenerator:
    """Tests for LoadGenerator."""

    @pytest.mark.asyncio
    async def test_emits_all_three_signals(self):
        """Test that every emitter posts as soon as the run starts."""
        requests = []
        generator = LoadGenerator("http://sonifier.test", client_factory=recording_factory(requests))

        await generator.start("low")
        assert generator.running
        await asyncio.sleep(0.05)
        await generator.stop()

        paths = sorted(request.url.path for request in requests)
        assert paths == ["/v1/logs", "/v1/metrics", "/v1/traces"]
        assert generator.sent == 3
        assert not generator.running

    @pytest.mark.asyncio
    async def test_posts_json(self):
        requests = []
        generator = LoadGenerator("http://sonifier.test/", client_factory=recording_factory(requests))

        await generator.start("low")
        await asyncio.sleep(0.05)
        await generator.stop()

        traces = next(r for r in requests if r.url.path == "/v1/traces")
        assert traces.headers["content-type"] == "application/json"
        assert "resourceSpans" in json.loads(traces.content)

    @pytest.mark.asyncio
    async def test_counts_rejected_exports(self):
        generator = LoadGenerator(
            "http://sonifier.test", client_factory=recording_factory([], status_code=500)
        )

        await generator.start("low")
        await asyncio.sleep(0.05)
        await generator.stop()

        assert generator.failed == 3
        assert generator.sent == 0

    @pytest.mark.asyncio
    async def test_connection_errors_are_counted(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        generator = LoadGenerator(
            "http://sonifier.test",
            client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        await generator.start("low")
        await asyncio.sleep(0.05)
        await generator.stop()

        assert generator.failed == 3

    @pytest.mark.asyncio
    async def test_unknown_profile_does_not_start(self):
        generator = LoadGenerator("http://sonifier.test", client_factory=recording_factory([]))

        with pytest.raises(ValueError):
            await generator.start("extreme")
        assert not generator.running

    @pytest.mark.asyncio
    async def test_start_while_running_is_noop(self):
        generator = LoadGenerator("http://sonifier.test", client_factory=recording_factory([]))

        await generator.start("low")
        await generator.start("stress")
        assert generator.profile.name == "low"
        await generator.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        generator = LoadGenerator()
        await generator.stop()
        assert not generator.running
