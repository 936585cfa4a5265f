"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Catalog query engine settings loaded from environment variables."""

    # Service
    service_name: str = "catalog-engine"
    api_version: str = "0.1.0"
    debug: bool = False

    # Query defaults
    default_page_size: int = 12
    search_default_limit: int = 20

    # Seed catalog
    random_seed: int = 42
    products_per_category: int = 5

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
