"""Application settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Query engine configuration (``EVOTE_`` prefixed environment variables)."""

    log_level: str = "INFO"
    json_logs: bool = False

    # Backend listing service
    election_api_base_url: str = "http://localhost:8000/api"
    election_api_timeout: float = 30.0

    # Pagination
    default_items_per_page: int = 10
    allowed_items_per_page: list[int] = [5, 10, 25, 50, 100]
    max_visible_pages: int = 5

    # Search
    suggestion_limit: int = 8
    history_limit: int = 20
    highlight_open: str = "<mark>"
    highlight_close: str = "</mark>"

    model_config = {"env_prefix": "EVOTE_", "env_file": ".env", "extra": "ignore"}

    @field_validator("allowed_items_per_page")
    @classmethod
    def _positive_sizes(cls, value: list[int]) -> list[int]:
        sizes = sorted({v for v in value if v > 0})
        if not sizes:
            raise ValueError("allowed_items_per_page needs at least one positive size")
        return sizes

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()
