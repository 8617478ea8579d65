"""Application settings loaded from the environment and an optional .env file."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    The dictionary API key is a credential and is only ever read from the
    environment or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    words_api_key: str | None = None
    words_api_host: str = "wordsapiv1.p.rapidapi.com"
    words_api_base_url: str = "https://wordsapiv1.p.rapidapi.com"
    lookup_timeout: float = Field(default=8.0, gt=0)
    cache_dir: str = ".cache/"

    @field_validator("words_api_key")
    @classmethod
    def strip_api_key(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            msg = "WORDS_API_KEY cannot be blank"
            raise ValueError(msg)
        return value

    @field_validator("words_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance."""
    return Settings()
