"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.app.models.common import PriceTier


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./tours.db"

    # Rate catalog (defaults to the bundled fixture)
    rates_fixture_path: str | None = None

    # Builder
    pricing_debounce_ms: int = 500
    max_duration_days: int = Field(30, ge=1, le=30)  # Tour.duration_days caps at 30
    default_party_size: int = 2
    default_price_tier: PriceTier = PriceTier.tier_a
    tour_code_prefix: str = "TOUR"

    # Listing
    recent_tours_limit: int = 20


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
