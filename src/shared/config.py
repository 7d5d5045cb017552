"""Runtime settings for the storefront core.

Values come from environment variables, optionally seeded from a ``.env``
file in the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from shared.exceptions import ConfigurationError

load_dotenv(dotenv_path=Path.cwd() / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError as exc:
        raise ConfigurationError(f"{keys[0]} must be an integer, got {v!r}") from exc


@dataclass(frozen=True)
class Settings:
    environment: str
    page_size: int
    cart_storage_key: str
    cart_storage_dir: str
    price_ceiling: int
    log_dir: str | None
    log_file_prefix: str


def load_settings() -> Settings:
    """Build a fresh Settings object from the current environment."""
    settings = Settings(
        environment=(_get_env("STOREFRONT_ENV", "PROTEAN_ENV", default="development") or "development").lower(),
        page_size=_get_int("CATALOG_PAGE_SIZE", default=12),
        cart_storage_key=_get_env("CART_STORAGE_KEY", default="parfumCart") or "parfumCart",
        cart_storage_dir=_get_env("CART_STORAGE_DIR", default=".storefront") or ".storefront",
        price_ceiling=_get_int("PRICE_CEILING", default=10_000_000),
        log_dir=_get_env("LOG_DIR"),
        log_file_prefix=_get_env("LOG_FILE_PREFIX", default="storefront") or "storefront",
    )

    if settings.page_size < 1:
        raise ConfigurationError("CATALOG_PAGE_SIZE must be at least 1")
    if settings.price_ceiling < 0:
        raise ConfigurationError("PRICE_CEILING must not be negative")
    return settings


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
