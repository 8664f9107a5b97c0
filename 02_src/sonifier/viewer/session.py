"""PresentationSession: turn stream envelopes into paced presentation events."""

from typing import Any, Protocol

from ..analyzer import TelemetryAnalyzer
from ..logging_config import get_logger
from ..models import ActivityLevel, AnalyzedTelemetry, TelemetryKind, TraceRef
from ..playback import (
    ActivitySmoother,
    IScheduler,
    LevelConfig,
    LevelQuantizer,
    PlaybackQueue,
    RateController,
)

logger = get_logger(__name__)

TRACE_SATURATION = 10
LOG_SATURATION = 10
TRACE_ERROR_BLOOM_RATE = 0.3
LOG_ERROR_BLOOM_RATE = 0.5


class IPresenter(Protocol):
    """Receives presentation events; rendering lives behind this boundary."""

    def present_trace(self, trace: TraceRef) -> None:
        ...

    def transition_level(self, level: ActivityLevel) -> None:
        ...

    def show_activity(self, activity: float) -> None:
        ...

    def error_bloom(self) -> None:
        ...


class LoggingPresenter:
    """Presenter that writes presentation events to the log."""

    def present_trace(self, trace: TraceRef) -> None:
        logger.debug("Drop %s%s", trace.short_id, " (error)" if trace.is_error else "")

    def transition_level(self, level: ActivityLevel) -> None:
        logger.info("Level transition -> %s (%.1f)", level.name, level.value)

    def show_activity(self, activity: float) -> None:
        logger.debug("Activity %d%%", round(activity * 100))

    def error_bloom(self) -> None:
        logger.info("Error bloom")


class PresentationSession:
    """Consumer pipeline for one observer of the broadcast stream."""

    def __init__(
        self,
        presenter: IPresenter,
        scheduler: IScheduler,
        analyzer: TelemetryAnalyzer | None = None,
        controller: RateController | None = None,
        level_config: LevelConfig | None = None,
    ):
        config = level_config or LevelConfig()
        self._presenter = presenter
        self._analyzer = analyzer or TelemetryAnalyzer()
        self.smoother = ActivitySmoother(decay=config.decay, floor=config.floor)
        self.quantizer = LevelQuantizer(config)
        self.queue: PlaybackQueue[TraceRef] = PlaybackQueue(
            presenter.present_trace, scheduler, controller
        )

    def start(self) -> None:
        self.queue.start()

    def stop(self) -> None:
        self.queue.stop()

    def handle_envelope(self, envelope: Any) -> AnalyzedTelemetry | None:
        """Process one decoded envelope; returns the analysis, or None if skipped."""
        if not isinstance(envelope, dict):
            return None
        payload = envelope.get("payload")
        if payload is None or payload == "":
            return None

        try:
            kind = TelemetryKind(envelope.get("type"))
        except ValueError:
            kind = TelemetryKind.UNKNOWN

        telemetry = self._analyzer.analyze(payload)

        trace_activity = min(telemetry.traces.count / TRACE_SATURATION, 1.0)
        metric_activity = (
            max(telemetry.metrics.cpu, telemetry.metrics.memory, telemetry.metrics.disk)
            / 100
        )
        log_activity = min(telemetry.logs.total_count / LOG_SATURATION, 1.0)

        activity = self.smoother.update(max(trace_activity, metric_activity, log_activity))
        self._presenter.show_activity(activity)

        if kind is TelemetryKind.METRICS and metric_activity > 0:
            level = self.quantizer.update(metric_activity)
            if level is not None:
                self._presenter.transition_level(level)

        if kind is TelemetryKind.TRACES and telemetry.traces.ids:
            depth = self.queue.enqueue(telemetry.traces.ids)
            logger.debug(
                "Buffered %d traces. Queue: %d, Rate: %sms",
                telemetry.traces.count,
                depth,
                self.queue.delay_ms,
            )

        if (
            telemetry.traces.error_rate > TRACE_ERROR_BLOOM_RATE
            or telemetry.logs.error_rate > LOG_ERROR_BLOOM_RATE
        ):
            self._presenter.error_bloom()

        return telemetry
