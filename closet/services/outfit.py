"""Suggestion pipeline that coordinates the wardrobe stores and the recommender."""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, Sequence

from closet.config.settings import Settings, get_settings
from closet.metrics.prometheus_exporter import (
    suggestion_requests_total,
    suggestions_returned_total,
)
from closet.recommender import (
    ClothingItem,
    FormalityLevel,
    OutfitSuggestion,
    WeatherSnapshot,
    WornLog,
    analyze_wear_history,
    history_window_start,
    recommend_outfits,
)

logger = logging.getLogger(__name__)


class ItemStore(Protocol):
    async def list_all_items(self) -> Sequence[ClothingItem]:
        ...


class HistoryStore(Protocol):
    async def list_worn_logs_since(self, since: date) -> Sequence[WornLog]:
        ...


class SuggestionService:
    """Loads the wardrobe snapshot and wear history, then runs the recommender."""

    def __init__(
        self,
        item_store: ItemStore,
        history_store: HistoryStore,
        settings: Settings | None = None,
    ) -> None:
        self._item_store = item_store
        self._history_store = history_store
        self._settings = settings or get_settings()

    async def generate_suggestions(
        self,
        weather: WeatherSnapshot,
        formality_preference: FormalityLevel,
        count: int | None = None,
        *,
        today: date | None = None,
    ) -> list[OutfitSuggestion]:
        """
        Return up to ``count`` outfit suggestions for today.

        Store failures are not caught here: recommending from a partial
        wardrobe or history would be silently misleading.
        """

        count = self._settings.suggestion_count if count is None else count
        today = today or date.today()
        suggestion_requests_total.inc()

        items = await self._item_store.list_all_items()
        logs = await self._history_store.list_worn_logs_since(history_window_start(today))
        recently_worn = analyze_wear_history(logs, today)

        suggestions = recommend_outfits(
            items,
            recently_worn,
            weather,
            formality_preference,
            count,
            per_category_limit=self._settings.max_items_per_category,
            pool_size=self._settings.candidate_pool_size,
        )
        suggestions_returned_total.inc(len(suggestions))
        logger.info(
            "Suggestions for %s at %.0f°F (%s): %d of %d requested",
            formality_preference.value,
            weather.temperature,
            weather.condition.value,
            len(suggestions),
            count,
        )
        return suggestions
