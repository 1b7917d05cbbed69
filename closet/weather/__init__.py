"""Weather provider client and its cache."""

from .cache import TTLCache, coordinate_key
from .client import (
    Location,
    LocationNotFoundError,
    WeatherClient,
    WeatherServiceError,
    map_weather_code,
    parse_current_weather,
)

__all__ = [
    "Location",
    "LocationNotFoundError",
    "TTLCache",
    "WeatherClient",
    "WeatherServiceError",
    "coordinate_key",
    "map_weather_code",
    "parse_current_weather",
]
