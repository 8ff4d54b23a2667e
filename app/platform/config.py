from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Olimpico Live Installation"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["*"]

    # ── Live state ──────────────────────────────
    EVENT_TTL_SECONDS: float = Field(300.0, gt=0)
    # "active" is a shorter window than the TTL; both are tuned independently
    ACTIVE_WINDOW_SECONDS: float = Field(120.0, gt=0)
    PHONE_TTL_SECONDS: float = Field(300.0, gt=0)

    # ── Streaming ───────────────────────────────
    KEEPALIVE_INTERVAL_SECONDS: float = Field(30.0, gt=0)
    PHONE_POLL_INTERVAL_SECONDS: float = Field(0.1, ge=0.1, le=1.0)
    STREAM_RETRY_MS: int = 3000
    STREAM_MAX_PENDING: int = Field(64, ge=1)

    # ── Server address discovery ────────────────
    NEXT_PUBLIC_BASE_URL: Optional[str] = None
    BASE_URL: Optional[str] = None
    VERCEL_URL: Optional[str] = None
    TUNNEL_URL: Optional[str] = None
    PORT: int = 3000
    FALLBACK_URL: str = "http://localhost:3000"

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_FILE_NAME: str = "installation.log"
    LOG_TO_FILE: bool = True

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
