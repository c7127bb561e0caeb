"""
Runtime configuration helpers for the Kabar web front end.

Loads BACKEND_URL, IMAGE_UPLOAD_URL and the other variables from the .env file
located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    backend_url: str = Field(default="http://localhost:5000", alias="BACKEND_URL")
    backend_timeout: float = Field(default=15.0, alias="BACKEND_TIMEOUT")
    image_upload_url: str = Field(default="http://localhost:5000/api/cloudinary", alias="IMAGE_UPLOAD_URL")

    app_name: str = Field(default="Kabar", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    public_base_url: str = Field(default="http://localhost:8000", alias="PUBLIC_BASE_URL")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    feed_page_size: int = Field(default=20, alias="FEED_PAGE_SIZE")
    search_limit: int = Field(default=10, alias="SEARCH_LIMIT")

    session_cookie_name: str = Field(default="kabar_session", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")
    session_cookie_max_age: int = Field(default=60 * 60 * 24 * 7, alias="SESSION_COOKIE_MAX_AGE")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def api_base(self) -> str:
        return f"{self.backend_url.rstrip('/')}/api/v1"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
