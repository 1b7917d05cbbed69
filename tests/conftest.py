"""Shared factories for recommender tests."""

from __future__ import annotations

from itertools import count
from typing import Callable, Iterable

import pytest

from closet.recommender.models import (
    Category,
    ClothingItem,
    FormalityLevel,
    WeatherCondition,
    WeatherSnapshot,
)

ItemFactory = Callable[..., ClothingItem]


@pytest.fixture
def make_item() -> ItemFactory:
    ids = count(1)

    def _make(
        category: Category | str,
        *,
        color: str = "black",
        warmth: int = 2,
        formality: FormalityLevel | str = FormalityLevel.CASUAL,
        tags: Iterable[str] = (),
        item_id: int | None = None,
    ) -> ClothingItem:
        return ClothingItem(
            id=item_id if item_id is not None else next(ids),
            category=Category(category),
            color=color,
            warmth_rating=warmth,
            formality=FormalityLevel(formality),
            name=f"{Category(category).value} {color}",
            tags=frozenset(tags),
        )

    return _make


def weather_at(temperature: float, condition: WeatherCondition = WeatherCondition.CLEAR) -> WeatherSnapshot:
    return WeatherSnapshot(temperature=temperature, condition=condition, feels_like=temperature, humidity=50)
