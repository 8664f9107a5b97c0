"""Tests for StreamViewer."""

import asyncio
import json

import pytest

from otlp_samples import logs_json
from sonifier.viewer import PresentationSession, StreamViewer


@pytest.fixture
def session(presenter, scheduler):
    return PresentationSession(presenter, scheduler)


class TestHandleMessage:
    """Tests for per-message processing."""

    def test_envelope_reaches_session(self, session, presenter):
        viewer = StreamViewer("ws://unused", session)
        viewer.handle_message(json.dumps({"type": "logs", "payload": logs_json(("INFO", 9))}))
        assert presenter.activity == [pytest.approx(0.1)]

    def test_invalid_json_is_logged_not_raised(self, session, presenter):
        viewer = StreamViewer("ws://unused", session)
        viewer.handle_message("{not json")
        assert presenter.activity == []


class TestRun:
    """Tests for the reconnect loop."""

    @pytest.mark.asyncio
    async def test_keeps_retrying_until_stopped(self, session):
        """Test that an unreachable server does not end the loop."""
        viewer = StreamViewer("ws://127.0.0.1:1/ws", session, reconnect_delay=0.01)
        task = asyncio.create_task(viewer.run())
        await asyncio.sleep(0.1)
        assert not task.done()

        viewer.stop()
        await asyncio.wait_for(task, timeout=6)
