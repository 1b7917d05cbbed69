"""Short natural-language explanations for selected outfits."""

from __future__ import annotations

from closet.recommender.models import (
    COLOR_MAX,
    FORMALITY_MAX,
    FRESHNESS_MAX,
    WEATHER_MAX,
    ScoredOutfit,
    WeatherCondition,
    WeatherSnapshot,
)

FALLBACK_REASON = "Good outfit for today"


def _ranked_factors(scored: ScoredOutfit) -> list[str]:
    breakdown = scored.breakdown
    factors = [
        ("weather", breakdown.weather_score / WEATHER_MAX),
        ("formality", breakdown.formality_score / FORMALITY_MAX),
        ("freshness", breakdown.freshness_score / FRESHNESS_MAX),
        ("color", breakdown.color_score / COLOR_MAX),
    ]
    # sorted() is stable, so ties keep the order above.
    return [name for name, _ in sorted(factors, key=lambda factor: factor[1], reverse=True)]


def generate_reason(scored: ScoredOutfit, weather: WeatherSnapshot) -> str:
    breakdown = scored.breakdown
    clauses: list[str] = []

    if _ranked_factors(scored)[0] == "weather" and breakdown.weather_score >= 25:
        if weather.temperature < 45:
            clauses.append("perfect for cold weather")
        elif weather.temperature > 75:
            clauses.append("ideal for warm weather")
        else:
            clauses.append("great for today's temperature")
        if weather.condition is WeatherCondition.RAIN:
            clauses.append("good for rainy conditions")

    if breakdown.formality_score >= 20:
        clauses.append("matches your formality preference")

    if breakdown.freshness_score == FRESHNESS_MAX:
        clauses.append("fresh combination - not worn recently")
    elif breakdown.freshness_score >= 15:
        clauses.append("relatively fresh outfit")

    if breakdown.color_score >= 18:
        clauses.append("excellent color coordination")
    elif breakdown.color_score >= 15:
        clauses.append("well-coordinated colors")

    if not clauses:
        return FALLBACK_REASON
    first, *rest = clauses
    return ", ".join([first[0].upper() + first[1:], *rest])
