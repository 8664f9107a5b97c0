"""Application bootstrap and lifecycle management."""

from typing import Any, Protocol

from .broadcast import BroadcastHub
from .config import SonifierConfig
from .ingestion import IIngestionService, IngestionService
from .logging_config import get_logger
from .normalizer import ProtocolNormalizer
from .snapshot import ISnapshotStore, SnapshotStore

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop the current snapshot."""
        ...


class Application:
    """Owns the ingestion pipeline services for one process."""

    def __init__(
        self,
        config: SonifierConfig | None = None,
        load_generator: Any = None,
    ):
        self._config = config or SonifierConfig()
        self._load_generator = load_generator

        # Components (will be initialized in start())
        self._normalizer: ProtocolNormalizer | None = None
        self._store: SnapshotStore | None = None
        self._hub: BroadcastHub | None = None
        self._ingestion: IngestionService | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        if self._ingestion is not None:
            return
        logger.info("Starting application")

        # 1. Normalizer (no dependencies)
        self._normalizer = ProtocolNormalizer()

        # 2. Snapshot store (no dependencies)
        self._store = SnapshotStore()

        # 3. Broadcast hub (no dependencies)
        self._hub = BroadcastHub(send_timeout=self._config.send_timeout)

        # 4. Ingestion (depends on Normalizer, Store, Hub)
        self._ingestion = IngestionService(self._normalizer, self._store, self._hub)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._load_generator is not None:
            await self._load_generator.stop()
        if self._hub:
            await self._hub.close_all()
            logger.info("Subscribers closed")
        self._ingestion = None
        self._hub = None
        self._store = None
        self._normalizer = None

    async def reset(self) -> None:
        """Drop the current snapshot."""
        await self.store.clear()
        logger.info("Snapshot cleared")

    @property
    def config(self) -> SonifierConfig:
        return self._config

    @property
    def store(self) -> ISnapshotStore:
        """Get snapshot store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def hub(self) -> BroadcastHub:
        """Get broadcast hub instance."""
        if not self._hub:
            raise RuntimeError("Application not started")
        return self._hub

    @property
    def ingestion(self) -> IIngestionService:
        """Get ingestion service instance."""
        if not self._ingestion:
            raise RuntimeError("Application not started")
        return self._ingestion

    @property
    def load_generator(self) -> Any:
        """Load generator, or None when not configured."""
        return self._load_generator
