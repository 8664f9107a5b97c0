"""StreamViewer: follow the broadcast stream over WebSocket."""

import asyncio
import json

import websockets
from websockets.exceptions import WebSocketException

from ..logging_config import get_logger
from .session import PresentationSession

logger = get_logger(__name__)

RECONNECT_DELAY = 2.0


class StreamViewer:
    """Connects to the stream endpoint and feeds a PresentationSession."""

    def __init__(
        self,
        url: str,
        session: PresentationSession,
        reconnect_delay: float = RECONNECT_DELAY,
    ):
        self._url = url
        self._session = session
        self._reconnect_delay = reconnect_delay
        self._running = False

    async def run(self) -> None:
        """Stream until stop() is called, reconnecting after disconnects."""
        self._running = True
        self._session.start()
        try:
            while self._running:
                try:
                    async with websockets.connect(self._url, open_timeout=5) as ws:
                        logger.info("WebSocket connected - real-time streaming active")
                        async for message in ws:
                            self.handle_message(message)
                except (OSError, asyncio.TimeoutError, WebSocketException) as e:
                    logger.warning("WebSocket unavailable: %s", e)

                if self._running:
                    logger.info(
                        "WebSocket disconnected, reconnecting in %.1fs",
                        self._reconnect_delay,
                    )
                    await asyncio.sleep(self._reconnect_delay)
        finally:
            self._session.stop()

    def stop(self) -> None:
        self._running = False

    def handle_message(self, message: str | bytes) -> None:
        try:
            envelope = json.loads(message)
            self._session.handle_envelope(envelope)
        except Exception as e:
            logger.error("Error processing stream message: %s", e, exc_info=True)
