"""Synthetic load generator posting OTLP/JSON export requests."""

import asyncio
import random
from typing import Callable, Protocol

import httpx

from sonifier.logging_config import get_logger

from .payloads import build_logs, build_metrics, build_traces
from .profiles import LoadProfile, get_profile

logger = get_logger(__name__)


class ILoadGenerator(Protocol):
    """Emit traces, metrics and logs at profile-defined rates."""

    @property
    def running(self) -> bool:
        ...

    async def start(self, profile: str) -> None:
        """Start a run with the named profile."""
        ...

    async def stop(self) -> None:
        """Stop the current run."""
        ...


class LoadGenerator:
    """Runs one emitter task per signal until the profile duration elapses."""

    def __init__(
        self,
        api_url: str = "http://localhost:44444",
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        rng: random.Random | None = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._client_factory = client_factory or httpx.AsyncClient
        self._rng = rng or random.Random()
        self._client: httpx.AsyncClient | None = None
        self._task: asyncio.Task | None = None
        self._profile: LoadProfile | None = None
        self.sent = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def profile(self) -> LoadProfile | None:
        return self._profile

    async def start(self, profile: str) -> None:
        """Start a run with the named profile."""
        selected = get_profile(profile)
        if self.running:
            return

        if self._client:
            await self._client.aclose()
        self._profile = selected
        self._client = self._client_factory()
        self._task = asyncio.create_task(self._run(selected))

    async def stop(self) -> None:
        """Stop the current run."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run(self, profile: LoadProfile) -> None:
        logger.info(
            "Starting %s activity simulation for %ss", profile.name, profile.duration
        )
        emitters = [
            self._emit_every(
                profile.trace_interval,
                "/v1/traces",
                lambda: build_traces(profile.error_rate, self._rng),
            ),
            self._emit_every(
                profile.metric_interval,
                "/v1/metrics",
                lambda: build_metrics(
                    profile.max_cpu, profile.max_memory, profile.max_disk_io
                ),
            ),
            self._emit_every(
                profile.log_interval,
                "/v1/logs",
                lambda: build_logs(profile.high_severity, self._rng),
            ),
        ]
        try:
            await asyncio.wait_for(asyncio.gather(*emitters), timeout=profile.duration)
        except asyncio.TimeoutError:
            pass
        finally:
            logger.info(
                "Simulation %s finished",
                profile.name,
                extra={"context": {"sent": self.sent, "failed": self.failed}},
            )

    async def _emit_every(
        self, interval: float, path: str, build: Callable[[], dict]
    ) -> None:
        while True:
            await self._send(path, build())
            await asyncio.sleep(interval)

    async def _send(self, path: str, body: dict) -> None:
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}{path}", json=body, timeout=10.0
            )
            if response.status_code == 200:
                self.sent += 1
            else:
                self.failed += 1
                logger.error("SIM: export to %s returned %s", path, response.status_code)
        except httpx.HTTPError as e:
            self.failed += 1
            logger.error("SIM: failed to export to %s: %s", path, e)
