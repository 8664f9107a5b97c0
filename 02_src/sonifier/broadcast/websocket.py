"""WebSocket adapter for the broadcast hub."""

import asyncio
import uuid

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from ..logging_config import get_logger

logger = get_logger(__name__)


class WebSocketSubscriber:
    """Wraps one accepted WebSocket as a hub subscriber."""

    def __init__(self, websocket: WebSocket, subscriber_id: str | None = None):
        self._websocket = websocket
        self._id = subscriber_id or str(uuid.uuid4())
        # One writer at a time per connection
        self._send_lock = asyncio.Lock()

    @property
    def id(self) -> str:
        return self._id

    async def send(self, message: str) -> None:
        async with self._send_lock:
            await self._websocket.send_text(message)

    async def close(self) -> None:
        if self._websocket.application_state == WebSocketState.DISCONNECTED:
            return
        try:
            await self._websocket.close()
        except (RuntimeError, OSError, WebSocketDisconnect) as e:
            # Transport already gone
            logger.debug("Close on dead WebSocket %s: %s", self._id, e)

    async def drain_control_frames(self) -> None:
        """Read and ignore incoming frames until the client disconnects."""
        while True:
            message = await self._websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
