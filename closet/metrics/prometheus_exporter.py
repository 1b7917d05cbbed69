"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


suggestion_requests_total = Counter(
    "suggestion_requests_total",
    "Total number of outfit suggestion requests.",
)

suggestions_returned_total = Counter(
    "suggestions_returned_total",
    "Total number of outfit suggestions returned to callers.",
)

weather_cache_hits_total = Counter(
    "weather_cache_hits_total",
    "Number of weather lookups served from the TTL cache.",
)

weather_fetch_failures_total = Counter(
    "weather_fetch_failures_total",
    "Number of failed calls to the weather provider.",
)
