from pydantic_settings import BaseSettings
from pydantic import ConfigDict, Field
from functools import lru_cache
from typing import Optional

from app.integrations.discord.client import REFRESH_ENDPOINT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Attachment Refresher"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)

    # Discord
    token: str = Field(..., min_length=1)  # Sent verbatim as the Authorization header
    refresh_endpoint: str = REFRESH_ENDPOINT
    refresh_timeout: Optional[float] = None  # Seconds, None = transport default

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
