"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from closet.recommender.models import TemperatureUnit


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _temperature_unit(value: str) -> str:
    try:
        return TemperatureUnit(value.strip().lower()).value
    except ValueError as exc:
        allowed = ", ".join(unit.value for unit in TemperatureUnit)
        raise ValueError(f"TEMPERATURE_UNIT must be one of: {allowed} (got {value!r})") from exc


def _optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/closet.db"

    weather_base_url: str = "https://api.open-meteo.com/v1"
    geocoding_base_url: str = "https://geocoding-api.open-meteo.com/v1"
    weather_timeout: float = 10.0
    weather_cache_ttl: float = 3600.0
    default_latitude: float | None = None
    default_longitude: float | None = None
    temperature_unit: str = "fahrenheit"

    suggestion_count: int = 3
    candidate_pool_size: int = 20
    max_items_per_category: int | None = 15


def _build_settings() -> Settings:
    _load_env_file()

    max_per_category = os.getenv("MAX_ITEMS_PER_CATEGORY", "15").strip()
    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/closet.db"),
        weather_base_url=os.getenv("WEATHER_BASE_URL", "https://api.open-meteo.com/v1"),
        geocoding_base_url=os.getenv(
            "GEOCODING_BASE_URL",
            "https://geocoding-api.open-meteo.com/v1",
        ),
        weather_timeout=float(os.getenv("WEATHER_TIMEOUT", "10")),
        weather_cache_ttl=float(os.getenv("WEATHER_CACHE_TTL", "3600")),
        default_latitude=_optional_float(os.getenv("DEFAULT_LATITUDE")),
        default_longitude=_optional_float(os.getenv("DEFAULT_LONGITUDE")),
        temperature_unit=_temperature_unit(os.getenv("TEMPERATURE_UNIT", "fahrenheit")),
        suggestion_count=int(os.getenv("SUGGESTION_COUNT", "3")),
        candidate_pool_size=int(os.getenv("CANDIDATE_POOL_SIZE", "20")),
        # "0" or an empty value disables the per-category cap.
        max_items_per_category=int(max_per_category or "0") or None,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
