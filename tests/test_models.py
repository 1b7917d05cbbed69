"""Tests for domain type invariants."""

from __future__ import annotations

import pytest

from closet.recommender.models import (
    Category,
    ClothingItem,
    FormalityLevel,
    InvalidItemError,
    OutfitCandidate,
    OutfitIntegrityError,
    TemperatureUnit,
    WeatherCondition,
    WeatherSnapshot,
)


@pytest.mark.parametrize("warmth", [0, 6, -1])
def test_warmth_outside_range_is_rejected(warmth: int) -> None:
    with pytest.raises(InvalidItemError):
        ClothingItem(
            id=1,
            category=Category.TOP,
            color="red",
            warmth_rating=warmth,
            formality=FormalityLevel.CASUAL,
        )


def test_from_record_rejects_unknown_category() -> None:
    with pytest.raises(InvalidItemError, match="invalid enumerated field"):
        ClothingItem.from_record(
            id=7,
            category="hat",
            color="red",
            warmth_rating=2,
            formality="casual",
        )


def test_tags_are_normalised_to_lower_case(make_item) -> None:
    item = make_item("top", tags=["Waterproof", " Summer "])

    assert item.tags == frozenset({"waterproof", "summer"})


def test_candidate_rejects_item_in_wrong_slot(make_item) -> None:
    shoes = make_item("shoes")
    with pytest.raises(OutfitIntegrityError, match="cannot fill the top slot"):
        OutfitCandidate(top=shoes, bottom=make_item("bottom"), shoes=make_item("shoes"))


def test_candidate_requires_core_slots(make_item) -> None:
    with pytest.raises(OutfitIntegrityError, match="missing its mandatory shoes"):
        OutfitCandidate(top=make_item("top"), bottom=make_item("bottom"), shoes=None)  # type: ignore[arg-type]


def test_candidate_key_and_ids(make_item) -> None:
    top, bottom, shoes, accessory = (
        make_item("top"),
        make_item("bottom"),
        make_item("shoes"),
        make_item("accessory"),
    )
    outfit = OutfitCandidate(top=top, bottom=bottom, shoes=shoes, accessory=accessory)

    assert outfit.item_ids() == (top.id, bottom.id, shoes.id, accessory.id)
    assert outfit.key() == (top.id, bottom.id, shoes.id, None, accessory.id)


def test_weather_from_celsius_is_stored_in_fahrenheit() -> None:
    weather = WeatherSnapshot.from_celsius(temperature=20, feels_like=10, condition=WeatherCondition.CLEAR)

    assert weather.temperature == pytest.approx(68)
    assert weather.feels_like == pytest.approx(50)
    assert weather.in_unit(TemperatureUnit.CELSIUS)["temperature"] == 20


def test_formality_distance() -> None:
    assert FormalityLevel.CASUAL.distance(FormalityLevel.FORMAL) == 2
    assert FormalityLevel.FORMAL.distance(FormalityLevel.BUSINESS_CASUAL) == 1
