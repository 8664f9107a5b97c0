"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from ..config import SonifierConfig
from .routes import control, ingestion, stream


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or Application(SonifierConfig.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="OTel Sonifier",
        description="Telemetry ingestion and real-time broadcast",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.application = application

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=application.config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(ingestion.create_ingestion_router(application))
    fastapi_app.include_router(stream.create_stream_router(application))
    fastapi_app.include_router(control.create_control_router(application))

    return fastapi_app
