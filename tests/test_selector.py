"""Tests for diverse top-K selection and reason text."""

from __future__ import annotations

from closet.recommender.models import OutfitCandidate, ScoreBreakdown, ScoredOutfit, WeatherCondition
from closet.recommender.reasons import FALLBACK_REASON, generate_reason
from closet.recommender.selector import select_top_suggestions
from conftest import weather_at


def _scored(top, bottom, shoes, total: float, accessory=None) -> ScoredOutfit:
    # Spread the total over the factors; only the sum matters for selection.
    breakdown = ScoreBreakdown(weather_score=total, formality_score=0, color_score=0, freshness_score=0)
    return ScoredOutfit(OutfitCandidate(top=top, bottom=bottom, shoes=shoes, accessory=accessory), breakdown)


def test_zero_scores_are_discarded(make_item) -> None:
    outfit = _scored(make_item("top"), make_item("bottom"), make_item("shoes"), 0)

    assert select_top_suggestions([outfit], 3, weather_at(65)) == []


def test_diversity_pass_skips_outfits_sharing_items(make_item) -> None:
    t1, t2 = make_item("top"), make_item("top")
    b1, b2 = make_item("bottom"), make_item("bottom")
    s1, s2 = make_item("shoes"), make_item("shoes")
    best = _scored(t1, b1, s1, 30)
    shares_top = _scored(t1, b2, s2, 29)
    disjoint = _scored(t2, b2, s2, 20)

    suggestions = select_top_suggestions([disjoint, shares_top, best], 2, weather_at(65))

    assert [s.outfit for s in suggestions] == [best.candidate, disjoint.candidate]


def test_backfill_allows_reuse_but_not_duplicates(make_item) -> None:
    top, bottom = make_item("top"), make_item("bottom")
    s1, s2 = make_item("shoes"), make_item("shoes")
    watch = make_item("accessory")
    first = _scored(top, bottom, s1, 30)
    second = _scored(top, bottom, s2, 25)
    third = _scored(top, bottom, s1, 20, accessory=watch)

    suggestions = select_top_suggestions([first, second, first, third], 3, weather_at(65))

    assert [s.outfit for s in suggestions] == [first.candidate, second.candidate, third.candidate]
    assert [s.score for s in suggestions] == [30, 25, 20]


def test_pool_is_limited_to_best_candidates(make_item) -> None:
    top, bottom = make_item("top"), make_item("bottom")
    outfits = [_scored(top, bottom, make_item("shoes"), 30 - index) for index in range(5)]

    suggestions = select_top_suggestions(outfits, 3, weather_at(65), pool_size=2)

    assert len(suggestions) == 2


def test_reason_for_strong_weather_fit_in_rain(make_item) -> None:
    outfit = OutfitCandidate(top=make_item("top"), bottom=make_item("bottom"), shoes=make_item("shoes"))
    scored = ScoredOutfit(outfit, ScoreBreakdown(30, 22, 10, 25))

    reason = generate_reason(scored, weather_at(60, WeatherCondition.RAIN))

    assert reason == (
        "Great for today's temperature, good for rainy conditions, "
        "matches your formality preference, fresh combination - not worn recently"
    )


def test_reason_temperature_phrases(make_item) -> None:
    outfit = OutfitCandidate(top=make_item("top"), bottom=make_item("bottom"), shoes=make_item("shoes"))
    scored = ScoredOutfit(outfit, ScoreBreakdown(30, 10, 5, 5))

    assert generate_reason(scored, weather_at(30)) == "Perfect for cold weather"
    assert generate_reason(scored, weather_at(80)) == "Ideal for warm weather"


def test_reason_skips_weather_when_not_top_factor(make_item) -> None:
    outfit = OutfitCandidate(top=make_item("top"), bottom=make_item("bottom"), shoes=make_item("shoes"))
    scored = ScoredOutfit(outfit, ScoreBreakdown(26, 25, 18, 15))

    assert generate_reason(scored, weather_at(65)) == (
        "Matches your formality preference, relatively fresh outfit, excellent color coordination"
    )


def test_reason_fallback(make_item) -> None:
    outfit = OutfitCandidate(top=make_item("top"), bottom=make_item("bottom"), shoes=make_item("shoes"))
    scored = ScoredOutfit(outfit, ScoreBreakdown(10, 10, 10, 5))

    assert generate_reason(scored, weather_at(65)) == FALLBACK_REASON
