"""Outfit recommendation core."""

from .engine import recommend_outfits
from .history import analyze_wear_history, history_window_start
from .models import (
    Category,
    ClothingItem,
    FormalityLevel,
    InvalidItemError,
    OutfitCandidate,
    OutfitIntegrityError,
    OutfitSuggestion,
    RecentlyWornSets,
    ScoreBreakdown,
    ScoredOutfit,
    TemperatureUnit,
    WeatherCondition,
    WeatherSnapshot,
    WornLog,
)

__all__ = [
    "Category",
    "ClothingItem",
    "FormalityLevel",
    "InvalidItemError",
    "OutfitCandidate",
    "OutfitIntegrityError",
    "OutfitSuggestion",
    "RecentlyWornSets",
    "ScoreBreakdown",
    "ScoredOutfit",
    "TemperatureUnit",
    "WeatherCondition",
    "WeatherSnapshot",
    "WornLog",
    "analyze_wear_history",
    "history_window_start",
    "recommend_outfits",
]
