"""Pick a small, diverse set of top-scoring outfits."""

from __future__ import annotations

import logging
from typing import Sequence

from closet.recommender.models import OutfitSuggestion, ScoredOutfit, WeatherSnapshot
from closet.recommender.reasons import generate_reason

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 20


def _suggest(scored: ScoredOutfit, weather: WeatherSnapshot) -> OutfitSuggestion:
    return OutfitSuggestion(
        outfit=scored.candidate,
        score=scored.score,
        reason=generate_reason(scored, weather),
        breakdown=scored.breakdown,
    )


def select_top_suggestions(
    scored_outfits: Sequence[ScoredOutfit],
    count: int,
    weather: WeatherSnapshot,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> list[OutfitSuggestion]:
    """
    Return up to ``count`` suggestions from the best ``pool_size`` outfits.

    The first pass accepts outfits greedily by score while no item repeats
    across accepted outfits. If that yields fewer than ``count`` results, a
    backfill pass appends the next best outfits that are not already present,
    allowing items to repeat.
    """

    if count <= 0:
        return []

    viable = [scored for scored in scored_outfits if scored.score > 0]
    # Stable sort: equal scores keep generation order.
    pool = sorted(viable, key=lambda scored: scored.score, reverse=True)[:pool_size]

    accepted: list[ScoredOutfit] = []
    used_ids: set[int] = set()
    for scored in pool:
        if len(accepted) >= count:
            break
        item_ids = scored.candidate.item_ids()
        if used_ids.intersection(item_ids):
            continue
        accepted.append(scored)
        used_ids.update(item_ids)

    diverse_count = len(accepted)
    if len(accepted) < count and len(pool) > len(accepted):
        accepted_keys = {scored.candidate.key() for scored in accepted}
        for scored in pool:
            if len(accepted) >= count:
                break
            key = scored.candidate.key()
            if key in accepted_keys:
                continue
            accepted.append(scored)
            accepted_keys.add(key)

    logger.debug(
        "Selected %d outfits (%d diverse, %d backfilled) from a pool of %d",
        len(accepted),
        diverse_count,
        len(accepted) - diverse_count,
        len(pool),
    )
    return [_suggest(scored, weather) for scored in accepted]
