"""Streaming subscription and health routes."""

from fastapi import APIRouter, WebSocket
from pydantic import BaseModel

from ...app import Application
from ...broadcast import WebSocketSubscriber
from ...logging_config import get_logger

logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Response model for health."""

    status: str
    subscribers: int
    has_snapshot: bool


def create_stream_router(app: Application) -> APIRouter:
    """Create stream router."""
    router = APIRouter(tags=["stream"])

    @router.websocket("/ws")
    async def stream_envelopes(websocket: WebSocket) -> None:
        """Register the connection and keep it open until the client leaves."""
        await websocket.accept()
        subscriber = WebSocketSubscriber(websocket)
        await app.hub.register(subscriber)
        try:
            await subscriber.drain_control_frames()
        finally:
            await app.hub.unregister(subscriber)
            logger.info("WebSocket connection closed")

    @router.get("/api/health", response_model=HealthResponse)
    async def health() -> dict:
        """Report subscriber count and snapshot presence."""
        snapshot = await app.store.get()
        return {
            "status": "ok",
            "subscribers": app.hub.subscriber_count,
            "has_snapshot": snapshot is not None,
        }

    return router
