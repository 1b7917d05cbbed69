"""Domain types shared by the recommendation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable


class InvalidItemError(ValueError):
    """Raised when a wardrobe record violates the item invariants."""


class OutfitIntegrityError(ValueError):
    """Raised when an outfit slot references an item of the wrong category."""


class Category(str, Enum):
    """Wardrobe slot an item can fill."""

    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    OUTERWEAR = "outerwear"
    ACCESSORY = "accessory"


class FormalityLevel(str, Enum):
    """Ordinal dress-code tier."""

    CASUAL = "casual"
    BUSINESS_CASUAL = "business_casual"
    FORMAL = "formal"

    @property
    def rank(self) -> int:
        return _FORMALITY_RANKS[self]

    def distance(self, other: "FormalityLevel") -> int:
        """Number of tiers between two levels."""

        return abs(self.rank - other.rank)


_FORMALITY_RANKS = {
    FormalityLevel.CASUAL: 0,
    FormalityLevel.BUSINESS_CASUAL: 1,
    FormalityLevel.FORMAL: 2,
}


class WeatherCondition(str, Enum):
    """Coarse precipitation/sky condition."""

    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAIN = "rain"
    SNOW = "snow"

    @property
    def is_wet(self) -> bool:
        return self in (WeatherCondition.RAIN, WeatherCondition.SNOW)


class TemperatureUnit(str, Enum):
    """Units a temperature can be presented in."""

    FAHRENHEIT = "fahrenheit"
    CELSIUS = "celsius"


MIN_WARMTH = 1
MAX_WARMTH = 5


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) * 5 / 9


@dataclass(frozen=True, slots=True)
class ClothingItem:
    """Read-only snapshot of a cataloged wardrobe item."""

    id: int
    category: Category
    color: str
    warmth_rating: int
    formality: FormalityLevel
    name: str = ""
    tags: frozenset[str] = frozenset()
    image_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.category, Category):
            raise InvalidItemError(f"Item {self.id} has unsupported category {self.category!r}")
        if not isinstance(self.formality, FormalityLevel):
            raise InvalidItemError(f"Item {self.id} has unsupported formality {self.formality!r}")
        if isinstance(self.warmth_rating, bool) or not isinstance(self.warmth_rating, int):
            raise InvalidItemError(f"Item {self.id} has non-integer warmth rating {self.warmth_rating!r}")
        if not MIN_WARMTH <= self.warmth_rating <= MAX_WARMTH:
            raise InvalidItemError(
                f"Item {self.id} warmth rating {self.warmth_rating} is outside "
                f"[{MIN_WARMTH}, {MAX_WARMTH}]",
            )
        # Tag matching is case-insensitive everywhere, so normalise once here.
        object.__setattr__(self, "tags", frozenset(tag.strip().lower() for tag in self.tags if tag))

    @classmethod
    def from_record(
        cls,
        *,
        id: int,
        category: str,
        color: str,
        warmth_rating: int,
        formality: str,
        name: str = "",
        tags: Iterable[str] | None = None,
        image_path: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "ClothingItem":
        """Build an item from loosely-typed storage values."""

        try:
            category_value = Category(category)
            formality_value = FormalityLevel(formality)
        except ValueError as exc:
            raise InvalidItemError(f"Item {id} has invalid enumerated field: {exc}") from exc
        return cls(
            id=id,
            category=category_value,
            color=color,
            warmth_rating=warmth_rating,
            formality=formality_value,
            name=name,
            tags=frozenset(tags or ()),
            image_path=image_path,
            created_at=created_at,
            updated_at=updated_at,
        )

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        return not self.tags.isdisjoint(tags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "color": self.color,
            "warmth_rating": self.warmth_rating,
            "formality": self.formality.value,
            "tags": sorted(self.tags),
            "image_path": self.image_path,
        }


@dataclass(frozen=True, slots=True)
class WeatherSnapshot:
    """Current conditions, always held in Fahrenheit."""

    temperature: float
    condition: WeatherCondition
    feels_like: float | None = None
    humidity: float | None = None
    description: str = ""
    timestamp: datetime | None = None

    @classmethod
    def from_celsius(
        cls,
        *,
        temperature: float,
        condition: WeatherCondition,
        feels_like: float | None = None,
        humidity: float | None = None,
        description: str = "",
        timestamp: datetime | None = None,
    ) -> "WeatherSnapshot":
        """Convert Celsius readings into the canonical Fahrenheit snapshot."""

        return cls(
            temperature=celsius_to_fahrenheit(temperature),
            condition=condition,
            feels_like=celsius_to_fahrenheit(feels_like) if feels_like is not None else None,
            humidity=humidity,
            description=description,
            timestamp=timestamp,
        )

    def in_unit(self, unit: TemperatureUnit) -> dict[str, Any]:
        """Return a display payload with temperatures in the requested unit."""

        convert = fahrenheit_to_celsius if unit is TemperatureUnit.CELSIUS else float
        return {
            "temperature": round(convert(self.temperature)),
            "feels_like": round(convert(self.feels_like)) if self.feels_like is not None else None,
            "condition": self.condition.value,
            "humidity": self.humidity,
            "description": self.description,
            "unit": unit.value,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


SLOTS: tuple[Category, ...] = (
    Category.TOP,
    Category.BOTTOM,
    Category.SHOES,
    Category.OUTERWEAR,
    Category.ACCESSORY,
)


@dataclass(frozen=True, slots=True)
class OutfitCandidate:
    """Structurally valid outfit: top, bottom and shoes plus optional layers."""

    top: ClothingItem
    bottom: ClothingItem
    shoes: ClothingItem
    outerwear: ClothingItem | None = None
    accessory: ClothingItem | None = None

    def __post_init__(self) -> None:
        for slot in SLOTS:
            item = getattr(self, slot.value)
            if item is None:
                if slot in (Category.TOP, Category.BOTTOM, Category.SHOES):
                    raise OutfitIntegrityError(f"Outfit is missing its mandatory {slot.value}")
                continue
            if item.category is not slot:
                raise OutfitIntegrityError(
                    f"Item {item.id} ({item.category.value}) cannot fill the {slot.value} slot",
                )

    def items(self) -> list[ClothingItem]:
        """Non-null items in slot order."""

        return [item for item in (getattr(self, slot.value) for slot in SLOTS) if item is not None]

    def item_ids(self) -> tuple[int, ...]:
        return tuple(item.id for item in self.items())

    def key(self) -> tuple[int | None, ...]:
        """Five-slot identity tuple, ``None`` for empty optional slots."""

        return tuple(
            item.id if item is not None else None
            for item in (getattr(self, slot.value) for slot in SLOTS)
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for slot in SLOTS:
            item = getattr(self, slot.value)
            payload[f"{slot.value}_id"] = item.id if item is not None else None
            payload[slot.value] = item.to_dict() if item is not None else None
        return payload


WEATHER_MAX = 30.0
FORMALITY_MAX = 25.0
COLOR_MAX = 20.0
FRESHNESS_MAX = 25.0


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Per-factor scores; ``total`` is always their exact sum."""

    weather_score: float
    formality_score: float
    color_score: float
    freshness_score: float

    @property
    def total(self) -> float:
        return self.weather_score + self.formality_score + self.color_score + self.freshness_score

    @classmethod
    def zero(cls) -> "ScoreBreakdown":
        return cls(0.0, 0.0, 0.0, 0.0)

    def to_dict(self) -> dict[str, float]:
        return {
            "weather": self.weather_score,
            "formality": self.formality_score,
            "color": self.color_score,
            "freshness": self.freshness_score,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class ScoredOutfit:
    candidate: OutfitCandidate
    breakdown: ScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.total


@dataclass(frozen=True, slots=True)
class WornLog:
    """A logged wear: the date and the ids of the items worn."""

    worn_date: date
    item_ids: tuple[int | None, ...]


@dataclass(slots=True)
class RecentlyWornSets:
    """Item ids worn within the last 2 days (excluded) or 3-7 days ago (penalized)."""

    excluded: set[int] = field(default_factory=set)
    penalized: set[int] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class OutfitSuggestion:
    """A selected outfit with its total score and a human readable reason."""

    outfit: OutfitCandidate
    score: float
    reason: str
    breakdown: ScoreBreakdown | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "outfit": self.outfit.to_dict(),
            "score": round(self.score, 2),
            "reason": self.reason,
            "breakdown": self.breakdown.to_dict() if self.breakdown else None,
        }
