"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 44444
DEFAULT_SEND_TIMEOUT = 5.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class SonifierConfig:
    """Runtime settings for the ingestion service and the viewer."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_file: str = str(DEFAULT_LOG_PATH)
    send_timeout: float = DEFAULT_SEND_TIMEOUT
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    ws_url: str | None = None
    playback_base_delay_ms: float = 20.0

    @property
    def api_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def stream_url(self) -> str:
        return self.ws_url or f"ws://{self.host}:{self.port}/ws"

    @classmethod
    def from_env(cls) -> "SonifierConfig":
        """Build settings from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")
        send_timeout = _env_float("BROADCAST_SEND_TIMEOUT", DEFAULT_SEND_TIMEOUT)
        if send_timeout <= 0:
            raise ValueError("BROADCAST_SEND_TIMEOUT must be positive")

        return cls(
            host=os.getenv("API_HOST", DEFAULT_HOST),
            port=_env_int("API_PORT", DEFAULT_PORT),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or str(DEFAULT_LOG_PATH),
            send_timeout=send_timeout,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            ws_url=os.getenv("SONIFIER_WS_URL") or None,
            playback_base_delay_ms=_env_float("PLAYBACK_BASE_DELAY_MS", 20.0),
        )
