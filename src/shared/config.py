"""Application settings, read from ``TINDAHAN_*`` environment variables or ``.env``."""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    environment: str = "development"
    log_level: str | None = None
    log_dir: str = "logs"
    log_to_file: bool = False
    currency: str = Field(default="PHP", max_length=3)

    # Marketplace price filter bands: low < price_band_low <= mid <= price_band_high < high
    price_band_low: int = 500
    price_band_high: int = 1000

    # Listing ceilings; together they keep cart totals exact to the cent
    price_max: Decimal = Field(default=Decimal("1000000000"), gt=0)
    stock_max: int = Field(default=1_000_000, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="TINDAHAN_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
