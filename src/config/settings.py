"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Required for any run that talks to Typesense:
        - TYPESENSE_API_KEY: Admin key (sync needs write access)

    Optional environment variables:
        - TYPESENSE_HOST / TYPESENSE_PORT / TYPESENSE_PROTOCOL
        - SOURCE_COLLECTION: Catalog to mine (default: consumer-products)
        - OUTPUT_COLLECTION: Overrides the derived suggestions collection name
        - OUTPUT_DIR: Where the review JSON file is written
        - MANUAL_OVERRIDES_PATH: Curated suggestions JSON (default: bundled file)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Typesense Configuration
    # ==========================================================================
    typesense_host: str = Field(default="localhost", description="Typesense node host")
    typesense_port: int = Field(default=8108, description="Typesense node port")
    typesense_protocol: str = Field(default="http", description="http or https")
    typesense_api_key: str = Field(default="", description="Typesense API key")
    typesense_connection_timeout_seconds: int = Field(
        default=60,
        description="Connection timeout for every Typesense request (seconds)"
    )

    @field_validator("typesense_protocol", mode="before")
    @classmethod
    def parse_protocol(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in ("http", "https"):
                raise ValueError(f"typesense_protocol must be http or https, got {v!r}")
        return v

    # ==========================================================================
    # Collections & Output
    # ==========================================================================
    source_collection: str = Field(
        default="consumer-products",
        description="Product collection mined for suggestions"
    )
    output_collection: Optional[str] = Field(
        default=None,
        description="Suggestions collection name (derived from source when unset)"
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Directory the review JSON file is written to"
    )
    manual_overrides_path: Optional[Path] = Field(
        default=None,
        description="Curated suggestions JSON (bundled manual_overrides.json when unset)"
    )

    @field_validator("output_dir", mode="before")
    @classmethod
    def parse_output_dir(cls, v):
        if isinstance(v, str):
            return Path(v.strip() or ".")
        return v

    @field_validator("manual_overrides_path", mode="before")
    @classmethod
    def parse_overrides_path(cls, v):
        if isinstance(v, str):
            return Path(v) if v.strip() else None
        return v

    # ==========================================================================
    # Generation Tuning
    # ==========================================================================
    resolver_sample_size: int = Field(
        default=10,
        ge=1,
        description="Documents sampled per value when intersecting ID arrays"
    )
    displayname_page_size: int = Field(
        default=250,
        ge=1,
        le=250,
        description="Groups per page when paging product display names"
    )
    max_pages: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on pages read by any paginated query"
    )
    sync_batch_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Suggestions per import request"
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(default="INFO", description="Minimum log level")
    json_logs: bool = Field(default=False, description="Emit JSON logs instead of console output")


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache and the .env file so tests are not affected
    by a developer's local configuration.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "typesense_api_key": "test-key",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
