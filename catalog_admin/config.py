from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (or a .env file).

    Attributes:
        APP_NAME: Service name shown in the OpenAPI docs
        DATABASE_URL: SQLAlchemy connection URL
        UPLOAD_DIR: Directory holding uploaded product images
        IMAGE_CACHE_MAX_AGE: Max age (seconds) sent with served images
        LOG_LEVEL: Root logging level
        CORS_*: Cross-origin allow-list applied at start-up
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Catalog Admin API"
    DATABASE_URL: str = "sqlite:///./catalog.db"
    UPLOAD_DIR: str = "uploads"
    IMAGE_CACHE_MAX_AGE: int = Field(default=86400, ge=0)
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = [
        "https://sanatanaparampare.vercel.app",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
    CORS_ALLOW_HEADERS: List[str] = [
        "Origin",
        "Content-Type",
        "Accept",
        "Authorization",
        "X-Requested-With",
    ]
    CORS_ALLOW_CREDENTIALS: bool = True


@dataclass(frozen=True)
class CorsPolicy:
    """Cross-origin policy, built once at start-up and handed to the app factory."""

    allow_origins: Tuple[str, ...]
    allow_methods: Tuple[str, ...]
    allow_headers: Tuple[str, ...]
    allow_credentials: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "CorsPolicy":
        return cls(
            allow_origins=tuple(settings.CORS_ORIGINS),
            allow_methods=tuple(settings.CORS_ALLOW_METHODS),
            allow_headers=tuple(settings.CORS_ALLOW_HEADERS),
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
