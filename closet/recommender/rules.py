"""Hard filtering rules applied to wardrobe items before outfit generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from closet.recommender.models import ClothingItem, FormalityLevel, WeatherSnapshot

logger = logging.getLogger(__name__)

# Ideal temperature band (°F) per warmth rating.
WARMTH_TEMPERATURE_BANDS: dict[int, tuple[float, float]] = {
    1: (75, 120),
    2: (65, 85),
    3: (50, 70),
    4: (35, 55),
    5: (-20, 50),
}
TEMPERATURE_TOLERANCE = 10

SEASON_TAGS = frozenset({"summer", "spring", "fall", "winter", "all-season", "year-round"})
UNIVERSAL_SEASON_TAGS = frozenset({"all-season", "year-round"})
SEASON_COMPATIBILITY: dict[str, frozenset[str]] = {
    "summer": frozenset({"summer", "spring"}) | UNIVERSAL_SEASON_TAGS,
    "spring": frozenset({"spring", "summer", "fall"}) | UNIVERSAL_SEASON_TAGS,
    "fall": frozenset({"fall", "spring", "winter"}) | UNIVERSAL_SEASON_TAGS,
    "winter": frozenset({"winter", "fall"}) | UNIVERSAL_SEASON_TAGS,
}


def season_for_temperature(temperature: float) -> str:
    """Derive a season from the current temperature (°F)."""

    if temperature >= 75:
        return "summer"
    if temperature >= 60:
        return "spring"  # transitional spring/fall weather
    if temperature >= 45:
        return "fall"
    return "winter"


@dataclass(frozen=True, slots=True)
class FilterContext:
    """Request context the rules are evaluated against."""

    weather: WeatherSnapshot
    formality: FormalityLevel


@dataclass(slots=True)
class ItemRule:
    """Represents a single hard constraint on a wardrobe item."""

    name: str
    description: str

    def is_satisfied(self, item: ClothingItem, context: FilterContext) -> bool:
        """Evaluate the rule for the provided item."""

        raise NotImplementedError


class FormalityRule(ItemRule):
    def __init__(self) -> None:
        super().__init__("formality", "Item formality within one level of the target")

    def is_satisfied(self, item: ClothingItem, context: FilterContext) -> bool:
        return item.formality.distance(context.formality) <= 1


class WeatherRule(ItemRule):
    def __init__(self) -> None:
        super().__init__("weather", "Temperature inside the item's warmth band ±10°")

    def is_satisfied(self, item: ClothingItem, context: FilterContext) -> bool:
        low, high = WARMTH_TEMPERATURE_BANDS[item.warmth_rating]
        temperature = context.weather.temperature
        # Rain and snow never disqualify an item; waterproofing is rewarded in scoring.
        return low - TEMPERATURE_TOLERANCE <= temperature <= high + TEMPERATURE_TOLERANCE


class SeasonRule(ItemRule):
    def __init__(self) -> None:
        super().__init__("season", "Season tags adjacent to the current season")

    def is_satisfied(self, item: ClothingItem, context: FilterContext) -> bool:
        if item.tags.isdisjoint(SEASON_TAGS):
            return True
        season = season_for_temperature(context.weather.temperature)
        return item.has_any_tag(SEASON_COMPATIBILITY[season])


DEFAULT_RULES: tuple[type[ItemRule], ...] = (FormalityRule, WeatherRule, SeasonRule)


class RulesEngine:
    """Evaluates a collection of item rules."""

    def __init__(self, rules: Iterable[ItemRule] | None = None) -> None:
        self._rules = list(rules) if rules is not None else [rule() for rule in DEFAULT_RULES]

    def evaluate(self, item: ClothingItem, context: FilterContext) -> list[str]:
        """Return names of rules that failed validation."""

        failed: list[str] = []
        for rule in self._rules:
            if not rule.is_satisfied(item, context):
                failed.append(rule.name)
        return failed


def filter_items(
    items: Iterable[ClothingItem],
    weather: WeatherSnapshot,
    formality: FormalityLevel,
    engine: RulesEngine | None = None,
) -> list[ClothingItem]:
    """Drop every item that fails at least one rule, preserving input order."""

    engine = engine or RulesEngine()
    context = FilterContext(weather=weather, formality=formality)
    kept: list[ClothingItem] = []
    for item in items:
        failed = engine.evaluate(item, context)
        if failed:
            logger.debug("Dropping item %s: failed %s", item.id, ", ".join(failed))
            continue
        kept.append(item)
    return kept
