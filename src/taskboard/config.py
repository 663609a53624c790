"""
Configuration for the Taskboard backend
Settings are read from environment variables and an optional .env file
"""
import logging
import secrets
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    database_url: str = "sqlite:///./taskboard.db"

    # Token signing
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = "/api"
    cors_origins: str = "*"  # comma separated

    # Diagnostics
    log_level: str = "INFO"
    debug: bool = False

    @field_validator("access_token_expire_minutes")
    @classmethod
    def positive_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
        return v

    @model_validator(mode="after")
    def ensure_secret(self) -> "Settings":
        if not self.jwt_secret:
            if not self.debug:
                raise ValueError("No JWT_SECRET set. Please set it in your environment or .env file.")
            # Tokens will not survive a restart
            self.jwt_secret = secrets.token_hex(32)
            logger.warning("Using a temporary JWT_SECRET for development. Set JWT_SECRET for production!")
        return self

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def access_token_ttl_seconds(self) -> int:
        return self.access_token_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
