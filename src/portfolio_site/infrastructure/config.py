"""Application configuration, loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None
    github_api_url: str = "https://api.github.com"
    repos_per_page: int = Field(default=100, gt=0)
    page_size: int = Field(default=9, gt=0)
    http_timeout: float = 30.0
    owner_name: str = "Portfolio"
    owner_tagline: str = "Full Stack Developer"
    owner_bio: str = (
        "Passionate about building reliable software and shipping it to people "
        "who use it."
    )
    resume_url: str | None = None
    github_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    contact_email: str | None = None
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
