"""Storefront settings.

Values are read from the environment (or a ``.env`` file) with the
``STOREFRONT_`` prefix:

    - STOREFRONT_ENV: development / test / staging / production
    - STOREFRONT_LOG_LEVEL: overrides the level derived from the environment
    - STOREFRONT_ORDER_ID_PREFIX: prefix of generated order ids
    - STOREFRONT_ORDER_ID_WIDTH: zero-padded width of the order sequence
    - STOREFRONT_SEED_CATALOGUE: load the default products into new catalogues
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorefrontSettings(BaseSettings):
    env: str = Field(default="development", description="Runtime environment")
    log_level: str | None = Field(default=None, description="Explicit log level")
    order_id_prefix: str = Field(default="ORD", min_length=1)
    order_id_width: int = Field(default=6, ge=1)
    seed_catalogue: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STOREFRONT_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> StorefrontSettings:
    """Return the process-wide settings instance."""
    return StorefrontSettings()
