"""Classify recently worn items into hard-excluded and penalized buckets."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

from closet.recommender.models import RecentlyWornSets, WornLog

logger = logging.getLogger(__name__)

EXCLUDE_WITHIN_DAYS = 2
PENALIZE_WITHIN_DAYS = 7


def history_window_start(today: date) -> date:
    """Earliest worn date that still influences freshness."""

    return today - timedelta(days=PENALIZE_WITHIN_DAYS)


def analyze_wear_history(logs: Iterable[WornLog], today: date) -> RecentlyWornSets:
    """
    Split item ids from recent wear logs into ``excluded`` and ``penalized``.

    Items worn on or after ``today - 2 days`` are excluded outright; items worn
    between 3 and 7 days ago only receive a freshness penalty. An item that
    shows up in both windows is kept in ``excluded`` alone.
    """

    exclude_since = today - timedelta(days=EXCLUDE_WITHIN_DAYS)
    window_start = history_window_start(today)
    worn = RecentlyWornSets()

    for log in logs:
        if log.worn_date < window_start:
            continue
        item_ids = [item_id for item_id in log.item_ids if item_id is not None]
        if log.worn_date >= exclude_since:
            worn.excluded.update(item_ids)
        else:
            worn.penalized.update(item_ids)

    worn.penalized -= worn.excluded
    logger.debug(
        "Wear history: %d excluded, %d penalized items",
        len(worn.excluded),
        len(worn.penalized),
    )
    return worn
