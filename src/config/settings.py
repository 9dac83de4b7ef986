"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Optional environment variables:
        - UPSTASH_VECTOR_REST_URL: Vector index REST endpoint
        - UPSTASH_VECTOR_REST_TOKEN: Vector index REST token
        - HOST: Server host (default: 0.0.0.0)
        - PORT: Server port (default: 8080)
        - ENVIRONMENT: Environment name (development, staging, production)
        - ORDERING_STRATEGY: "probe" (default) or "metadata"
        - SEARCH_TIMEOUT_SECONDS: Per-request vector index timeout (default: 10)
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
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Vector Index (Upstash Vector)
    # ==========================================================================
    upstash_vector_rest_url: str = Field(default="", description="Upstash Vector REST URL")
    upstash_vector_rest_token: str = Field(default="", description="Upstash Vector REST token")

    @property
    def vector_configured(self) -> bool:
        return bool(self.upstash_vector_rest_url and self.upstash_vector_rest_token)

    # ==========================================================================
    # Product Search
    # ==========================================================================
    search_top_k: int = Field(
        default=12,
        ge=1,
        le=1000,
        description="Maximum number of products returned per query"
    )
    search_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=600,
        description="Timeout for a single vector index request (seconds)"
    )
    catalog_average_price: float = Field(
        default=25.0,
        ge=0,
        description="Average catalog price, used as the neutral probe when no sort is requested"
    )
    catalog_max_price: float = Field(
        default=50.0,
        ge=0,
        description="Highest catalog price, used as the probe for price-descending sorts"
    )
    ordering_strategy: str = Field(
        default="probe",
        description="Result ordering: 'probe' (vector bias only) or 'metadata' (exact price sort of the page)"
    )

    @field_validator("ordering_strategy", mode="before")
    @classmethod
    def parse_ordering_strategy(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in ("probe", "metadata"):
                raise ValueError(f"ordering_strategy must be 'probe' or 'metadata', got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_price_bounds(self):
        """Average price must lie inside the catalog price domain."""
        if self.catalog_average_price > self.catalog_max_price:
            raise ValueError(
                f"catalog_average_price ({self.catalog_average_price}) must be "
                f"<= catalog_max_price ({self.catalog_max_price})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If an environment variable holds an invalid value
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "upstash_vector_rest_url": "https://test-vector.upstash.io",
        "upstash_vector_rest_token": "test-token",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
