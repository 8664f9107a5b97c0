"""Ingestion service: normalize, store, broadcast."""

import gzip
import zlib
from typing import Protocol

from ..broadcast import IBroadcastHub
from ..logging_config import get_logger
from ..models import Envelope, TelemetryKind
from ..normalizer import INormalizer
from ..snapshot import ISnapshotStore

logger = get_logger(__name__)


class IIngestionService(Protocol):
    """Accept one export request and fan its snapshot out."""

    async def ingest(
        self,
        body: bytes,
        content_encoding: str | None = None,
        route_kind: TelemetryKind | None = None,
    ) -> Envelope:
        """Normalize, store and publish. Never rejects content."""
        ...

    async def current(self) -> Envelope | None:
        """Envelope for the current snapshot, or None when empty."""
        ...


def decode_body(body: bytes, content_encoding: str | None) -> bytes:
    """Undo a gzip/deflate Content-Encoding; return the body as-is on failure."""
    if not content_encoding:
        return body
    encoding = content_encoding.strip().lower()
    try:
        if encoding in ("gzip", "x-gzip"):
            return gzip.decompress(body)
        if encoding == "deflate":
            return zlib.decompress(body)
    except (OSError, EOFError, zlib.error) as e:
        logger.warning("Could not decode %s body, using raw bytes: %s", encoding, e)
    return body


class IngestionService:
    """Runs the ingestion pipeline for one request at a time per call."""

    def __init__(
        self,
        normalizer: INormalizer,
        store: ISnapshotStore,
        hub: IBroadcastHub,
    ):
        self._normalizer = normalizer
        self._store = store
        self._hub = hub

    async def ingest(
        self,
        body: bytes,
        content_encoding: str | None = None,
        route_kind: TelemetryKind | None = None,
    ) -> Envelope:
        """Normalize, store and publish. Never rejects content."""
        data = decode_body(body, content_encoding)
        result = self._normalizer.normalize(data)

        snapshot = await self._store.put(result.kind, result.payload)
        envelope = Envelope.from_snapshot(snapshot)
        delivered = await self._hub.publish(envelope)

        if route_kind is not None and route_kind != result.kind:
            logger.debug(
                "Route kind %s differs from payload kind %s",
                route_kind.value,
                result.kind.value,
            )

        logger.info(
            "Received telemetry data",
            extra={
                "context": {
                    "type": result.kind.value,
                    "bytes": len(data),
                    "route": route_kind.value if route_kind else "legacy",
                    "delivered": delivered,
                }
            },
        )
        return envelope

    async def current(self) -> Envelope | None:
        """Envelope for the current snapshot, or None when empty."""
        snapshot = await self._store.get()
        if snapshot is None:
            return None
        return Envelope.from_snapshot(snapshot)
