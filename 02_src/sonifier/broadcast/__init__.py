"""Broadcast hub module."""

from .hub import BroadcastHub, IBroadcastHub, ISubscriber
from .websocket import WebSocketSubscriber

__all__ = ["BroadcastHub", "IBroadcastHub", "ISubscriber", "WebSocketSubscriber"]
