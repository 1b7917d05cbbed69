"""End-to-end tests for the pure recommendation pipeline."""

from __future__ import annotations

import pytest

from closet.recommender.candidates import generate_candidates
from closet.recommender.engine import recommend_outfits
from closet.recommender.models import FormalityLevel, RecentlyWornSets, WeatherCondition
from closet.recommender.rules import filter_items
from closet.recommender.scorer import OutfitScorer
from conftest import weather_at


@pytest.fixture
def basic_wardrobe(make_item):
    return [
        make_item("top", warmth=2, color="white"),
        make_item("bottom", warmth=2, color="navy"),
        make_item("shoes", warmth=2, color="black"),
    ]


def test_empty_wardrobe_returns_nothing() -> None:
    assert recommend_outfits([], RecentlyWornSets(), weather_at(68), FormalityLevel.CASUAL) == []


def test_single_outfit_on_mild_day(basic_wardrobe) -> None:
    suggestions = recommend_outfits(basic_wardrobe, RecentlyWornSets(), weather_at(68), FormalityLevel.CASUAL)

    assert len(suggestions) == 1
    assert suggestions[0].outfit.outerwear is None
    assert suggestions[0].score > 0
    assert suggestions[0].reason


def test_cold_day_without_outerwear_still_suggests(make_item) -> None:
    # Warmth 2 stock fails the weather rule below 55°F, so the cold wardrobe is warmth 4.
    items = [make_item(category, warmth=4, color="black") for category in ("top", "bottom", "shoes")]

    suggestions = recommend_outfits(items, RecentlyWornSets(), weather_at(30), FormalityLevel.CASUAL)

    assert len(suggestions) == 1
    assert suggestions[0].outfit.outerwear is None
    # Half a warmth level short of ideal and no outerwear bonus.
    assert suggestions[0].breakdown.weather_score == pytest.approx(27)


def test_item_worn_yesterday_blocks_the_only_outfit(basic_wardrobe) -> None:
    worn = RecentlyWornSets(excluded={basic_wardrobe[0].id})

    assert recommend_outfits(basic_wardrobe, worn, weather_at(68), FormalityLevel.CASUAL) == []


def test_large_wardrobe_gives_disjoint_suggestions(make_item) -> None:
    items = [
        make_item(category, warmth=2, color="black")
        for category in ("top", "bottom", "shoes")
        for _ in range(10)
    ]

    suggestions = recommend_outfits(items, RecentlyWornSets(), weather_at(68), FormalityLevel.CASUAL, 3)

    assert len(suggestions) == 3
    ids = [item_id for suggestion in suggestions for item_id in suggestion.outfit.item_ids()]
    assert len(ids) == len(set(ids))


def test_stale_items_never_appear_in_suggestions(make_item) -> None:
    items = [
        make_item(category, warmth=3, color=color)
        for category in ("top", "bottom", "shoes", "accessory")
        for color in ("black", "white", "red")
    ]
    stale = {items[0].id, items[4].id}

    suggestions = recommend_outfits(items, RecentlyWornSets(excluded=stale), weather_at(60), FormalityLevel.CASUAL)

    assert suggestions
    for suggestion in suggestions:
        assert stale.isdisjoint(suggestion.outfit.item_ids())


def test_cold_weather_suggestions_wear_outerwear(make_item) -> None:
    items = [
        make_item("top", warmth=4),
        make_item("bottom", warmth=4),
        make_item("shoes", warmth=4),
        make_item("outerwear", warmth=5, color="gray", tags=["winter", "waterproof"]),
    ]

    suggestions = recommend_outfits(
        items,
        RecentlyWornSets(),
        weather_at(35, WeatherCondition.SNOW),
        FormalityLevel.CASUAL,
    )

    assert len(suggestions) == 1
    assert suggestions[0].outfit.outerwear is not None
    assert suggestions[0].breakdown.weather_score == 30


def test_pipeline_is_idempotent(make_item) -> None:
    items = [
        make_item(category, warmth=warmth, color=color, formality=formality)
        for category in ("top", "bottom", "shoes", "outerwear", "accessory")
        for warmth, color, formality in ((2, "blue", "casual"), (3, "orange", "business_casual"))
    ]
    worn = RecentlyWornSets(penalized={items[1].id, items[4].id})
    weather = weather_at(62, WeatherCondition.CLOUDY)

    first = recommend_outfits(items, worn, weather, FormalityLevel.CASUAL, 5)
    second = recommend_outfits(items, worn, weather, FormalityLevel.CASUAL, 5)

    assert [s.outfit.key() for s in first] == [s.outfit.key() for s in second]
    assert [s.score for s in first] == [s.score for s in second]


def test_every_scored_candidate_respects_ranges(make_item) -> None:
    items = [
        make_item(category, warmth=warmth, color=color, formality=formality)
        for category in ("top", "bottom", "shoes", "outerwear", "accessory")
        for warmth, color, formality in ((3, "pink", "casual"), (4, "green", "business_casual"), (3, "brown", "formal"))
    ]
    weather = weather_at(48, WeatherCondition.RAIN)
    eligible = filter_items(items, weather, FormalityLevel.BUSINESS_CASUAL)
    scorer = OutfitScorer(weather, FormalityLevel.BUSINESS_CASUAL, RecentlyWornSets(penalized={items[0].id}))

    scored = scorer.score_all(generate_candidates(eligible, weather, FormalityLevel.BUSINESS_CASUAL))

    assert scored
    for outfit in scored:
        breakdown = outfit.breakdown
        assert 0 <= breakdown.weather_score <= 30
        assert 0 <= breakdown.formality_score <= 25
        assert 0 <= breakdown.color_score <= 20
        assert 0 <= breakdown.freshness_score <= 25
        assert breakdown.total == pytest.approx(
            breakdown.weather_score
            + breakdown.formality_score
            + breakdown.color_score
            + breakdown.freshness_score
        )
        assert outfit.candidate.outerwear is not None


def test_light_wardrobe_is_filtered_out_in_freezing_weather(basic_wardrobe) -> None:
    assert recommend_outfits(basic_wardrobe, RecentlyWornSets(), weather_at(30), FormalityLevel.CASUAL) == []


def test_category_cap_keeps_fresh_items_over_recently_worn(make_item) -> None:
    tops = [make_item("top", item_id=item_id) for item_id in range(1, 17)]
    items = [*tops, make_item("bottom", item_id=100), make_item("shoes", item_id=101)]
    worn = RecentlyWornSets(excluded=set(range(1, 16)))

    suggestions = recommend_outfits(
        items,
        worn,
        weather_at(68),
        FormalityLevel.CASUAL,
        per_category_limit=15,
    )

    assert [suggestion.outfit.top.id for suggestion in suggestions] == [16]
