"""Pure recommendation pipeline: filter, generate, score, select."""

from __future__ import annotations

import logging
from typing import Sequence

from closet.recommender.candidates import generate_candidates
from closet.recommender.models import (
    ClothingItem,
    FormalityLevel,
    OutfitSuggestion,
    RecentlyWornSets,
    WeatherSnapshot,
)
from closet.recommender.rules import filter_items
from closet.recommender.scorer import OutfitScorer
from closet.recommender.selector import DEFAULT_POOL_SIZE, select_top_suggestions

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_COUNT = 3


def recommend_outfits(
    items: Sequence[ClothingItem],
    recently_worn: RecentlyWornSets,
    weather: WeatherSnapshot,
    formality: FormalityLevel,
    count: int = DEFAULT_SUGGESTION_COUNT,
    *,
    per_category_limit: int | None = None,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> list[OutfitSuggestion]:
    """
    Return up to ``count`` outfit suggestions for the given context.

    An empty wardrobe, a wardrobe with nothing left after filtering, or one
    where every outfit reuses an item worn in the last two days all produce an
    empty list rather than an error.
    """

    if not items:
        logger.info("Wardrobe is empty, nothing to suggest")
        return []

    eligible = filter_items(items, weather, formality)
    candidates = generate_candidates(eligible, weather, formality, per_category_limit, recently_worn)
    if not candidates:
        logger.info(
            "No outfit candidates: %d of %d items passed filtering",
            len(eligible),
            len(items),
        )
        return []

    scorer = OutfitScorer(weather, formality, recently_worn)
    scored = scorer.score_all(candidates)
    suggestions = select_top_suggestions(scored, count, weather, pool_size=pool_size)
    logger.info(
        "Suggested %d outfits from %d candidates (%d eligible items)",
        len(suggestions),
        len(candidates),
        len(eligible),
    )
    return suggestions
