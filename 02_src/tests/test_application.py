"""Tests for Application."""

import pytest

from otlp_samples import FakeSubscriber, traces_proto
from sonifier.app import Application
from sonifier.config import SonifierConfig


class FakeGenerator:
    """Load generator double recording lifecycle calls."""

    def __init__(self):
        self.stopped = 0

    async def start(self, profile: str) -> None:
        pass

    async def stop(self) -> None:
        self.stopped += 1


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self):
        """Test that start initializes all components."""
        app = Application()
        await app.start()

        assert app._normalizer is not None
        assert app._store is not None
        assert app._hub is not None
        assert app._ingestion is not None

    @pytest.mark.asyncio
    async def test_start_wires_dependencies(self):
        """Test that ingestion shares the store and hub exposed by the app."""
        app = Application()
        await app.start()

        assert app._ingestion._store is app.store
        assert app._ingestion._hub is app.hub
        assert app._ingestion._normalizer is app._normalizer

    @pytest.mark.asyncio
    async def test_start_uses_configured_send_timeout(self):
        app = Application(SonifierConfig(send_timeout=1.5))
        await app.start()

        assert app.hub._send_timeout == 1.5

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        """Test that a second start keeps the same components."""
        app = Application()
        await app.start()
        hub = app.hub
        await app.start()

        assert app.hub is hub

    def test_accessors_before_start_raise(self):
        """Test that services are unavailable before start."""
        app = Application()
        with pytest.raises(RuntimeError):
            _ = app.store
        with pytest.raises(RuntimeError):
            _ = app.hub
        with pytest.raises(RuntimeError):
            _ = app.ingestion


class TestApplicationStop:
    """Tests for Application.stop()."""

    @pytest.mark.asyncio
    async def test_stop_closes_subscribers(self):
        """Test that stop disconnects every subscriber."""
        app = Application()
        await app.start()
        subscriber = FakeSubscriber("viewer")
        await app.hub.register(subscriber)

        await app.stop()

        assert subscriber.closed
        with pytest.raises(RuntimeError):
            _ = app.hub

    @pytest.mark.asyncio
    async def test_stop_stops_load_generator(self):
        generator = FakeGenerator()
        app = Application(load_generator=generator)
        await app.start()
        await app.stop()

        assert generator.stopped == 1

    @pytest.mark.asyncio
    async def test_restart_after_stop(self):
        """Test that the application can be started again."""
        app = Application()
        await app.start()
        await app.stop()
        await app.start()

        assert await app.store.get() is None


class TestApplicationReset:
    """Tests for Application.reset()."""

    @pytest.mark.asyncio
    async def test_reset_clears_snapshot(self):
        """Test that reset drops the current snapshot."""
        app = Application()
        await app.start()
        await app.ingestion.ingest(traces_proto())
        assert await app.store.get() is not None

        await app.reset()

        assert await app.store.get() is None

    @pytest.mark.asyncio
    async def test_reset_keeps_subscribers(self):
        app = Application()
        await app.start()
        subscriber = FakeSubscriber("viewer")
        await app.hub.register(subscriber)

        await app.reset()
        await app.ingestion.ingest(traces_proto())

        assert len(subscriber.messages) == 1
