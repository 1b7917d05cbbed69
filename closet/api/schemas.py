"""Request and response bodies for the HTTP API."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, model_validator

from closet.recommender.models import (
    FormalityLevel,
    TemperatureUnit,
    WeatherCondition,
    WeatherSnapshot,
)


class WeatherInput(BaseModel):
    """Caller-supplied weather, in either unit."""

    temperature: float
    condition: WeatherCondition
    feels_like: float | None = None
    humidity: float | None = Field(default=None, ge=0, le=100)
    description: str = ""
    unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT

    def to_snapshot(self) -> WeatherSnapshot:
        if self.unit is TemperatureUnit.CELSIUS:
            return WeatherSnapshot.from_celsius(
                temperature=self.temperature,
                condition=self.condition,
                feels_like=self.feels_like,
                humidity=self.humidity,
                description=self.description,
            )
        return WeatherSnapshot(
            temperature=self.temperature,
            condition=self.condition,
            feels_like=self.feels_like,
            humidity=self.humidity,
            description=self.description,
        )


class SuggestionRequest(BaseModel):
    formality: FormalityLevel
    count: int | None = Field(default=None, ge=1, le=10)
    weather: WeatherInput | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    city: str | None = None
    units: TemperatureUnit | None = None

    @model_validator(mode="after")
    def _coordinates_come_in_pairs(self) -> "SuggestionRequest":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self


class SuggestionResponse(BaseModel):
    weather: dict[str, Any]
    suggestions: list[dict[str, Any]]


class OutfitCreateRequest(BaseModel):
    top_id: int
    bottom_id: int
    shoes_id: int
    outerwear_id: int | None = None
    accessory_id: int | None = None
    name: str | None = Field(default=None, max_length=100)


class WornLogRequest(BaseModel):
    worn_date: date | None = None
    notes: str | None = None
