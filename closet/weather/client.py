"""Async client for the Open-Meteo forecast and geocoding APIs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

from closet.config.settings import Settings, get_settings
from closet.metrics.prometheus_exporter import (
    weather_cache_hits_total,
    weather_fetch_failures_total,
)
from closet.recommender.models import WeatherCondition, WeatherSnapshot
from closet.weather.cache import TTLCache, coordinate_key

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,weather_code"


class WeatherServiceError(RuntimeError):
    """Raised when the weather provider fails, times out, or returns junk."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class LocationNotFoundError(LookupError):
    """Raised when geocoding yields no result for a place name."""


@dataclass(frozen=True, slots=True)
class Location:
    latitude: float
    longitude: float
    name: str
    country: str = ""


def map_weather_code(code: int) -> tuple[WeatherCondition, str]:
    """Translate a WMO weather code into a coarse condition and description."""

    if code == 0:
        return WeatherCondition.CLEAR, "Clear sky"
    if code == 1:
        return WeatherCondition.CLEAR, "Mainly clear"
    if code == 2:
        return WeatherCondition.CLOUDY, "Partly cloudy"
    if code == 3:
        return WeatherCondition.CLOUDY, "Overcast"
    if 45 <= code <= 48:
        return WeatherCondition.CLOUDY, "Foggy"
    if 51 <= code <= 67:
        return WeatherCondition.RAIN, "Rainy"
    if 71 <= code <= 77:
        return WeatherCondition.SNOW, "Snowy"
    if 80 <= code <= 82:
        return WeatherCondition.RAIN, "Rain showers"
    if 85 <= code <= 86:
        return WeatherCondition.SNOW, "Snow showers"
    if 95 <= code <= 99:
        return WeatherCondition.RAIN, "Thunderstorm"
    return WeatherCondition.CLOUDY, "Unknown"


def parse_current_weather(payload: Mapping[str, Any]) -> WeatherSnapshot:
    """Build a Fahrenheit snapshot from an Open-Meteo ``current`` response."""

    try:
        current = payload["current"]
        condition, description = map_weather_code(int(current["weather_code"]))
        return WeatherSnapshot(
            temperature=round(float(current["temperature_2m"])),
            feels_like=round(float(current["apparent_temperature"])),
            humidity=float(current["relative_humidity_2m"]),
            condition=condition,
            description=description,
            timestamp=datetime.now(timezone.utc),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise WeatherServiceError(f"Malformed weather payload: {exc}") from exc


class WeatherClient:
    """Fetches current conditions with a bounded timeout and a TTL cache."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        cache: TTLCache[WeatherSnapshot] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._cache = cache if cache is not None else TTLCache(self._settings.weather_cache_ttl)
        self._client = httpx.AsyncClient(
            timeout=self._settings.weather_timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def _get_json(self, url: str, params: Mapping[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            raise WeatherServiceError("Timed out waiting for the weather provider.") from exc
        except httpx.HTTPStatusError as exc:
            raise WeatherServiceError(
                f"Weather provider returned {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise WeatherServiceError(f"Weather provider request failed: {exc}") from exc
        except ValueError as exc:
            raise WeatherServiceError("Weather provider returned invalid JSON.") from exc

    async def fetch_current(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Return current weather for the coordinates, served from cache when fresh."""

        key = coordinate_key(latitude, longitude)
        cached = self._cache.get(key)
        if cached is not None:
            weather_cache_hits_total.inc()
            return cached

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_FIELDS,
            "temperature_unit": "fahrenheit",
            "timezone": "auto",
        }
        try:
            payload = await self._get_json(f"{self._settings.weather_base_url.rstrip('/')}/forecast", params)
            snapshot = parse_current_weather(payload)
        except WeatherServiceError as exc:
            self._cache.invalidate(key)
            weather_fetch_failures_total.inc()
            logger.error("Failed to fetch weather for %s: %s", key, exc)
            raise

        self._cache.set(key, snapshot)
        return snapshot

    async def geocode_city(self, name: str) -> Location:
        """Resolve a place name to coordinates."""

        params = {"name": name, "count": 1, "language": "en", "format": "json"}
        payload = await self._get_json(f"{self._settings.geocoding_base_url.rstrip('/')}/search", params)
        results = payload.get("results") or []
        if not results:
            raise LocationNotFoundError(f"Location not found: {name}")

        first = results[0]
        try:
            return Location(
                latitude=float(first["latitude"]),
                longitude=float(first["longitude"]),
                name=first.get("name", name),
                country=first.get("country", ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise WeatherServiceError(f"Malformed geocoding payload: {exc}") from exc

    async def ping(self) -> bool:
        """Return ``True`` if the forecast endpoint answers for a fixed location."""

        await self._get_json(
            f"{self._settings.weather_base_url.rstrip('/')}/forecast",
            {"latitude": 0, "longitude": 0, "current": "temperature_2m"},
        )
        return True
