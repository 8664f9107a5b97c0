"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from otlp_samples import RecordingPresenter  # noqa: E402


@pytest.fixture
def normalizer():
    """Create a protocol normalizer."""
    from sonifier.normalizer import ProtocolNormalizer

    return ProtocolNormalizer()


@pytest.fixture
def store():
    """Create an empty snapshot store."""
    from sonifier.snapshot import SnapshotStore

    return SnapshotStore()


@pytest.fixture
def hub():
    """Create a broadcast hub with a short send timeout."""
    from sonifier.broadcast import BroadcastHub

    return BroadcastHub(send_timeout=0.2)


@pytest.fixture
def ingestion(normalizer, store, hub):
    """Create an ingestion service wired to the fixtures above."""
    from sonifier.ingestion import IngestionService

    return IngestionService(normalizer, store, hub)


@pytest.fixture
def scheduler():
    """Create a virtual-clock scheduler."""
    from sonifier.playback import ManualScheduler

    return ManualScheduler()


@pytest.fixture
def presenter():
    """Create a recording presenter."""
    return RecordingPresenter()
