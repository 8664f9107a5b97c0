"""Main entry point for the OTel Sonifier."""

import argparse
import asyncio
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from sim import LoadGenerator
from sonifier.api import create_fastapi_app
from sonifier.app import Application
from sonifier.config import SonifierConfig
from sonifier.logging_config import setup_logging
from sonifier.playback import AsyncioScheduler, PlaybackConfig, RateController
from sonifier.viewer import LoggingPresenter, PresentationSession, StreamViewer


def serve(config: SonifierConfig) -> None:
    """Run the ingestion and broadcast server."""
    application = Application(config, load_generator=LoadGenerator(api_url=config.api_url))
    app = create_fastapi_app(application)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )


def watch(config: SonifierConfig) -> None:
    """Follow the broadcast stream and log paced presentation events."""
    session = PresentationSession(
        presenter=LoggingPresenter(),
        scheduler=AsyncioScheduler(),
        controller=RateController(
            PlaybackConfig(base_delay_ms=config.playback_base_delay_ms)
        ),
    )
    viewer = StreamViewer(config.stream_url, session)
    try:
        asyncio.run(viewer.run())
    except KeyboardInterrupt:
        viewer.stop()


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    parser = argparse.ArgumentParser(description="OTel Sonifier")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["serve", "watch"],
        default="serve",
        help="serve: run the ingestion server; watch: follow the stream",
    )
    args = parser.parse_args()

    config = SonifierConfig.from_env()
    setup_logging(config)

    if args.command == "watch":
        watch(config)
    else:
        serve(config)


if __name__ == "__main__":
    main()
