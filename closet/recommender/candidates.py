"""Enumerate structurally valid outfits from the filtered wardrobe."""

from __future__ import annotations

import logging
from itertools import product
from typing import Iterable, Iterator, Mapping, Sequence

from closet.recommender.models import (
    Category,
    ClothingItem,
    FormalityLevel,
    OutfitCandidate,
    RecentlyWornSets,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

OUTERWEAR_REQUIRED_BELOW = 50


def ideal_warmth(temperature: float) -> float:
    """Average warmth rating an outfit should have at this temperature (°F)."""

    if temperature >= 75:
        return 1.5
    if temperature >= 60:
        return 2.5
    if temperature >= 45:
        return 3.5
    return 4.5


def group_by_category(items: Iterable[ClothingItem]) -> dict[Category, list[ClothingItem]]:
    grouped: dict[Category, list[ClothingItem]] = {category: [] for category in Category}
    for item in items:
        grouped[item.category].append(item)
    return grouped


def limit_per_category(
    grouped: Mapping[Category, Sequence[ClothingItem]],
    weather: WeatherSnapshot,
    formality: FormalityLevel,
    limit: int,
    recently_worn: RecentlyWornSets | None = None,
) -> dict[Category, list[ClothingItem]]:
    """
    Keep only the ``limit`` most promising items of each category.

    In a category over the limit, items worn in the last two days are dropped
    before ranking. The rest are ranked with
    fresh items ahead of penalized ones, then by formality distance to the
    target, then by distance of their warmth rating to the ideal warmth, then
    by id. Categories at or below the limit are returned untouched.
    """

    target_warmth = ideal_warmth(weather.temperature)
    excluded = recently_worn.excluded if recently_worn else set()
    penalized = recently_worn.penalized if recently_worn else set()

    def _rank(item: ClothingItem) -> tuple[bool, int, float, int]:
        return (
            item.id in penalized,
            item.formality.distance(formality),
            abs(item.warmth_rating - target_warmth),
            item.id,
        )

    limited: dict[Category, list[ClothingItem]] = {}
    for category, items in grouped.items():
        if len(items) <= limit:
            limited[category] = list(items)
            continue
        wearable = [item for item in items if item.id not in excluded]
        kept = sorted(wearable, key=_rank)[:limit]
        logger.debug("Capped %s from %d to %d items", category.value, len(items), len(kept))
        # Preserve original wardrobe order among the kept items.
        kept_ids = {item.id for item in kept}
        limited[category] = [item for item in items if item.id in kept_ids]
    return limited


def iter_candidates(
    grouped: Mapping[Category, Sequence[ClothingItem]],
    weather: WeatherSnapshot,
) -> Iterator[OutfitCandidate]:
    """
    Lazily yield every outfit combination exactly once.

    Top, bottom and shoes are mandatory. Below 50°F every candidate carries
    outerwear when any is available; otherwise variants with and without
    outerwear are produced. Accessories are always optional.

    Combinations come out in diagonal order: the top index advances fastest
    and every other slot is offset from it, so consecutive candidates share
    as few items as possible. Ties in score therefore favour disjoint outfits
    downstream.
    """

    tops = list(grouped.get(Category.TOP, ()))
    bottoms = list(grouped.get(Category.BOTTOM, ()))
    shoes = list(grouped.get(Category.SHOES, ()))
    outerwears = list(grouped.get(Category.OUTERWEAR, ()))
    accessories = list(grouped.get(Category.ACCESSORY, ()))

    if not (tops and bottoms and shoes):
        return

    require_outerwear = weather.temperature < OUTERWEAR_REQUIRED_BELOW and bool(outerwears)
    outerwear_options: list[ClothingItem | None] = (
        outerwears if require_outerwear else [None, *outerwears]
    )
    accessory_options: list[ClothingItem | None] = [None, *accessories]

    for bottom_offset, shoes_offset, outerwear_offset, accessory_offset in product(
        range(len(bottoms)),
        range(len(shoes)),
        range(len(outerwear_options)),
        range(len(accessory_options)),
    ):
        for index, top in enumerate(tops):
            yield OutfitCandidate(
                top=top,
                bottom=bottoms[(index + bottom_offset) % len(bottoms)],
                shoes=shoes[(index + shoes_offset) % len(shoes)],
                outerwear=outerwear_options[(index + outerwear_offset) % len(outerwear_options)],
                accessory=accessory_options[(index + accessory_offset) % len(accessory_options)],
            )


def generate_candidates(
    items: Iterable[ClothingItem],
    weather: WeatherSnapshot,
    formality: FormalityLevel,
    per_category_limit: int | None = None,
    recently_worn: RecentlyWornSets | None = None,
) -> list[OutfitCandidate]:
    """Group ``items`` and materialise all candidates, optionally capping each category."""

    grouped = group_by_category(items)
    if per_category_limit is not None and per_category_limit > 0:
        grouped = limit_per_category(grouped, weather, formality, per_category_limit, recently_worn)
    candidates = list(iter_candidates(grouped, weather))
    logger.debug("Generated %d outfit candidates", len(candidates))
    return candidates
