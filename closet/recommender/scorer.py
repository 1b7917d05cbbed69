"""Outfit scoring utilities.

Every candidate receives four independent sub-scores:

- weather (0-30): warmth fit for the temperature plus outerwear/waterproof bonuses
- formality (0-25): per-item closeness to the target tier, minus a mix penalty
- color (0-20): neutral palettes, complementary pairs, clashes
- freshness (0-25): penalty for items worn in the last week

Each sub-score is clamped on its own before they are summed.
"""

from __future__ import annotations

from typing import Sequence

from closet.recommender.candidates import OUTERWEAR_REQUIRED_BELOW, ideal_warmth
from closet.recommender.models import (
    COLOR_MAX,
    FORMALITY_MAX,
    FRESHNESS_MAX,
    WEATHER_MAX,
    ClothingItem,
    FormalityLevel,
    OutfitCandidate,
    RecentlyWornSets,
    ScoreBreakdown,
    ScoredOutfit,
    WeatherSnapshot,
)

WARMTH_PENALTY_PER_LEVEL = 6
OUTERWEAR_BONUS = 5
WATERPROOF_BONUS = 5
WATERPROOF_TAGS = frozenset({"waterproof", "rain", "water-resistant"})

EXACT_FORMALITY_POINTS = 25
NEAR_FORMALITY_POINTS = 15
FORMALITY_MIX_PENALTY = 5

NEUTRAL_COLORS = ("black", "white", "gray", "grey", "beige", "tan", "brown", "navy", "cream")
COMPLEMENTARY_PAIRS = (
    ("blue", "orange"),
    ("red", "green"),
    ("yellow", "purple"),
    ("pink", "green"),
    ("navy", "white"),
    ("black", "white"),
)
CLASHING_PAIRS = (
    ("brown", "black"),
    ("navy", "black"),
    ("red", "pink"),
)
COLOR_BASE = 10
ALL_NEUTRAL_BONUS = 8
ONE_ACCENT_BONUS = 6
COMPLEMENTARY_BONUS = 4
CLASH_PENALTY = 5
BUSY_PENALTY = 3
MAX_ACCENT_COLORS = 2

# Freshness points by number of items worn 3-7 days ago; three or more share the floor.
FRESHNESS_BY_PENALIZED_COUNT = (25, 15, 8)
STALE_FRESHNESS_FLOOR = 5


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, float(value)))


def score_weather(items: Sequence[ClothingItem], weather: WeatherSnapshot, has_outerwear: bool) -> float:
    average_warmth = sum(item.warmth_rating for item in items) / len(items)
    score = WEATHER_MAX - WARMTH_PENALTY_PER_LEVEL * abs(average_warmth - ideal_warmth(weather.temperature))

    if weather.temperature < OUTERWEAR_REQUIRED_BELOW and has_outerwear:
        score += OUTERWEAR_BONUS
    if weather.condition.is_wet and any(item.has_any_tag(WATERPROOF_TAGS) for item in items):
        score += WATERPROOF_BONUS

    return _clamp(score, WEATHER_MAX)


def score_formality(items: Sequence[ClothingItem], target: FormalityLevel) -> float:
    points = []
    for item in items:
        distance = item.formality.distance(target)
        if distance == 0:
            points.append(EXACT_FORMALITY_POINTS)
        elif distance == 1:
            points.append(NEAR_FORMALITY_POINTS)
        else:
            points.append(0)
    score = sum(points) / len(points)

    ranks = [item.formality.rank for item in items]
    if max(ranks) - min(ranks) > 1:
        score -= FORMALITY_MIX_PENALTY

    return _clamp(score, FORMALITY_MAX)


def _has_color(colors: Sequence[str], needle: str) -> bool:
    return any(needle in color for color in colors)


def score_color(items: Sequence[ClothingItem]) -> float:
    colors = [item.color.lower() for item in items]
    neutral_count = sum(
        1 for color in colors if any(neutral in color for neutral in NEUTRAL_COLORS)
    )

    score = COLOR_BASE
    if neutral_count == len(colors):
        score += ALL_NEUTRAL_BONUS
    elif neutral_count == len(colors) - 1:
        score += ONE_ACCENT_BONUS

    for first, second in COMPLEMENTARY_PAIRS:
        if _has_color(colors, first) and _has_color(colors, second):
            score += COMPLEMENTARY_BONUS

    for first, second in CLASHING_PAIRS:
        if _has_color(colors, first) and _has_color(colors, second):
            score -= CLASH_PENALTY

    if len(colors) - neutral_count > MAX_ACCENT_COLORS:
        score -= BUSY_PENALTY

    return _clamp(score, COLOR_MAX)


def score_freshness(item_ids: Sequence[int], recently_worn: RecentlyWornSets) -> float:
    if any(item_id in recently_worn.excluded for item_id in item_ids):
        return 0.0
    penalized = sum(1 for item_id in item_ids if item_id in recently_worn.penalized)
    if penalized < len(FRESHNESS_BY_PENALIZED_COUNT):
        return _clamp(FRESHNESS_BY_PENALIZED_COUNT[penalized], FRESHNESS_MAX)
    return _clamp(STALE_FRESHNESS_FLOOR, FRESHNESS_MAX)


class OutfitScorer:
    """Ranks outfit candidates based on heuristic scoring."""

    def __init__(
        self,
        weather: WeatherSnapshot,
        formality: FormalityLevel,
        recently_worn: RecentlyWornSets,
    ) -> None:
        self._weather = weather
        self._formality = formality
        self._recently_worn = recently_worn

    def is_stale(self, candidate: OutfitCandidate) -> bool:
        """Return ``True`` if the outfit reuses an item worn in the last two days."""

        return any(item_id in self._recently_worn.excluded for item_id in candidate.item_ids())

    def breakdown(self, candidate: OutfitCandidate) -> ScoreBreakdown:
        """Return the per-factor scores for ``candidate``."""

        # Hard staleness floors the whole outfit so that total stays the exact sum.
        if self.is_stale(candidate):
            return ScoreBreakdown.zero()

        items = candidate.items()
        return ScoreBreakdown(
            weather_score=score_weather(items, self._weather, candidate.outerwear is not None),
            formality_score=score_formality(items, self._formality),
            color_score=score_color(items),
            freshness_score=score_freshness(candidate.item_ids(), self._recently_worn),
        )

    def score(self, candidate: OutfitCandidate) -> ScoredOutfit:
        return ScoredOutfit(candidate=candidate, breakdown=self.breakdown(candidate))

    def score_all(self, candidates: Sequence[OutfitCandidate]) -> list[ScoredOutfit]:
        return [self.score(candidate) for candidate in candidates]
