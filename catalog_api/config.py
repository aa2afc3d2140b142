"""
Environment-driven settings.

Values are read on first use rather than at import time so the app can be
imported (tests, OpenAPI generation) without a Cosmos DB account configured.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from catalog_api.exceptions import ConfigurationError


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key) or default


@dataclass(frozen=True)
class CosmosSettings:
    """Cosmos DB connection settings."""

    endpoint: str
    database: str
    products_container: str = "products"
    key: Optional[str] = None  # None means DefaultAzureCredential


@dataclass(frozen=True)
class AppSettings:
    """HTTP app settings."""

    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)


def load_cosmos_settings() -> CosmosSettings:
    return CosmosSettings(
        endpoint=_get_required_env("COSMOSDB_ENDPOINT"),
        database=_get_required_env("COSMOSDB_DATABASE"),
        products_container=_get_optional_env("COSMOSDB_CONTAINER_PRODUCTS", "products"),
        key=_get_optional_env("COSMOSDB_KEY"),
    )


def load_app_settings() -> AppSettings:
    origins = _get_optional_env("CORS_ALLOW_ORIGINS", "*")
    return AppSettings(
        log_level=_get_optional_env("LOG_LEVEL", "INFO").upper(),
        cors_allow_origins=tuple(
            origin.strip() for origin in origins.split(",") if origin.strip()
        ),
    )


@lru_cache(maxsize=1)
def get_cosmos_settings() -> CosmosSettings:
    return load_cosmos_settings()


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return load_app_settings()
