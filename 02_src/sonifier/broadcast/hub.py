"""Broadcast hub: fan envelopes out to every live subscriber."""

import asyncio
from typing import Protocol

from ..logging_config import get_logger
from ..models import Envelope

logger = get_logger(__name__)


class ISubscriber(Protocol):
    """A live duplex connection that receives broadcast envelopes."""

    @property
    def id(self) -> str:
        """Connection identity."""
        ...

    async def send(self, message: str) -> None:
        """Write one text message to the connection."""
        ...

    async def close(self) -> None:
        """Close the connection."""
        ...


class IBroadcastHub(Protocol):
    """Registry of subscribers with best-effort fan-out."""

    async def register(self, subscriber: ISubscriber) -> None:
        """Add a subscriber to the active set."""
        ...

    async def unregister(self, subscriber: ISubscriber) -> None:
        """Remove a subscriber (idempotent)."""
        ...

    async def publish(self, envelope: Envelope) -> int:
        """Deliver an envelope to every registered subscriber."""
        ...


class BroadcastHub:
    """Best-effort, single-attempt fan-out with failed-subscriber pruning."""

    def __init__(self, send_timeout: float = 5.0):
        self._send_timeout = send_timeout
        self._lock = asyncio.Lock()
        self._subscribers: dict[str, ISubscriber] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def register(self, subscriber: ISubscriber) -> None:
        """Add a subscriber to the active set."""
        async with self._lock:
            self._subscribers[subscriber.id] = subscriber
            count = len(self._subscribers)
        logger.info(
            "Subscriber registered",
            extra={"context": {"subscriber_id": subscriber.id, "subscribers": count}},
        )

    async def unregister(self, subscriber: ISubscriber) -> None:
        """Remove a subscriber (idempotent)."""
        async with self._lock:
            removed = self._subscribers.pop(subscriber.id, None)
            count = len(self._subscribers)
        if removed is not None:
            logger.info(
                "Subscriber unregistered",
                extra={"context": {"subscriber_id": subscriber.id, "subscribers": count}},
            )

    async def publish(self, envelope: Envelope) -> int:
        """Deliver an envelope to every registered subscriber.

        Returns the number of successful deliveries. A subscriber whose write
        raises or times out is removed and closed; the failure never reaches
        the caller or the other subscribers.
        """
        message = envelope.to_json()

        # Copy membership under the lock, write outside it
        async with self._lock:
            targets = list(self._subscribers.values())

        if not targets:
            return 0

        results = await asyncio.gather(
            *[self._deliver(subscriber, message) for subscriber in targets],
            return_exceptions=True,
        )

        delivered = 0
        for subscriber, result in zip(targets, results):
            if isinstance(result, BaseException):
                await self._drop(subscriber, result)
            else:
                delivered += 1
        return delivered

    async def close_all(self) -> None:
        """Close and forget every subscriber."""
        async with self._lock:
            targets = list(self._subscribers.values())
            self._subscribers.clear()
        for subscriber in targets:
            await self._close(subscriber)

    async def _deliver(self, subscriber: ISubscriber, message: str) -> None:
        await asyncio.wait_for(subscriber.send(message), timeout=self._send_timeout)

    async def _drop(self, subscriber: ISubscriber, error: BaseException) -> None:
        if isinstance(error, asyncio.TimeoutError):
            reason = f"send timed out after {self._send_timeout}s"
        else:
            reason = repr(error)
        logger.warning(
            "Failed to write to subscriber, removing it",
            extra={"context": {"subscriber_id": subscriber.id, "error": reason}},
        )
        await self.unregister(subscriber)
        await self._close(subscriber)

    async def _close(self, subscriber: ISubscriber) -> None:
        # Closing a dead transport can raise or hang; neither may reach publish
        try:
            await asyncio.wait_for(subscriber.close(), timeout=self._send_timeout)
        except Exception as e:
            logger.debug(
                "Close failed for subscriber %s: %r", subscriber.id, e
            )
