"""Ingestion and snapshot pull routes."""

from typing import Any

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from ...app import Application
from ...models import TelemetryKind

# Push routes; classification always comes from the body
INGESTION_ROUTES: tuple[tuple[str, TelemetryKind | None], ...] = (
    ("/v1/traces", TelemetryKind.TRACES),
    ("/v1/metrics", TelemetryKind.METRICS),
    ("/v1/logs", TelemetryKind.LOGS),
    ("/telemetry", None),  # legacy catch-all
)


class EnvelopeResponse(BaseModel):
    """Response model for the current snapshot."""

    type: TelemetryKind
    payload: Any


def create_ingestion_router(app: Application) -> APIRouter:
    """Create ingestion router."""
    router = APIRouter(tags=["ingestion"])

    def make_handler(route_kind: TelemetryKind | None):
        async def receive_telemetry(request: Request) -> Response:
            """Accept one OTLP export request (JSON or protobuf)."""
            body = await request.body()
            await app.ingestion.ingest(
                body,
                content_encoding=request.headers.get("content-encoding"),
                route_kind=route_kind,
            )
            return Response(status_code=200)

        return receive_telemetry

    for path, kind in INGESTION_ROUTES:
        router.add_api_route(
            path,
            make_handler(kind),
            methods=["POST"],
            name=f"ingest_{kind.value if kind else 'legacy'}",
        )

    @router.get(
        "/telemetry-data",
        response_model=EnvelopeResponse,
        responses={204: {"description": "Nothing ingested yet"}},
    )
    async def get_telemetry_data():
        """Return the current snapshot envelope."""
        envelope = await app.ingestion.current()
        if envelope is None:
            return Response(status_code=204)
        return EnvelopeResponse(type=envelope.type, payload=envelope.payload)

    return router
