from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # App
    APP_NAME: str = "WatchRoom"
    APP_ENV: str = "dev"
    API_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5173", "http://localhost:8000"])  # type: ignore[assignment]

    # Идентификаторы комнат: short (9 символов base36) | uuid
    ROOM_ID_SCHEME: str = "short"
    ROOM_ID_LENGTH: int = 9
    ROOM_ID_MAX_ATTEMPTS: int = 16

    # Reaper
    REAPER_ENABLED: bool = True
    REAPER_INTERVAL_SEC: int = 600
    ROOM_IDLE_AFTER_SEC: int = 600
    # комнаты, куда никто не заходил, живут вечно, пока не задано
    UNCLAIMED_ROOM_TTL_SEC: int | None = None

    # Video metadata (YouTube oEmbed)
    VIDEO_OEMBED_URL: str = "https://www.youtube.com/oembed"
    VIDEO_METADATA_TIMEOUT_SEC: float = 10.0


@lru_cache()
def get_settings() -> Settings:
    s = Settings()
    # allow comma-separated env for lists
    if isinstance(s.CORS_ORIGINS, str):  # type: ignore[unreachable]
        s.CORS_ORIGINS = [x.strip() for x in s.CORS_ORIGINS.split(",") if x.strip()]  # type: ignore[attr-defined]
    return s
