"""OTel Sonifier: telemetry ingestion, broadcast and adaptive playback."""

from .analyzer import TelemetryAnalyzer
from .app import Application, IApplication
from .broadcast import BroadcastHub, IBroadcastHub, ISubscriber
from .config import SonifierConfig
from .ingestion import IIngestionService, IngestionService
from .models import (
    ActivityLevel,
    AnalyzedTelemetry,
    Envelope,
    PlaybackState,
    Snapshot,
    TelemetryKind,
    TraceRef,
)
from .normalizer import INormalizer, ProtocolNormalizer
from .playback import (
    ActivitySmoother,
    LevelQuantizer,
    PlaybackQueue,
    RateController,
)
from .snapshot import ISnapshotStore, SnapshotStore

__all__ = [
    # Application
    "Application",
    "IApplication",
    "SonifierConfig",
    # Models
    "TelemetryKind",
    "Snapshot",
    "Envelope",
    "AnalyzedTelemetry",
    "TraceRef",
    "ActivityLevel",
    "PlaybackState",
    # Components
    "INormalizer",
    "ProtocolNormalizer",
    "ISnapshotStore",
    "SnapshotStore",
    "ISubscriber",
    "IBroadcastHub",
    "BroadcastHub",
    "IIngestionService",
    "IngestionService",
    "TelemetryAnalyzer",
    "PlaybackQueue",
    "RateController",
    "LevelQuantizer",
    "ActivitySmoother",
]
