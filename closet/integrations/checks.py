"""Connectivity checks for the weather provider and the database."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from sqlalchemy import text

from closet.weather.client import WeatherClient


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # report any failure as a failed check
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_weather() -> IntegrationCheckResult:
    """Ping the Open-Meteo forecast API and return the result."""

    client = WeatherClient()

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Open-Meteo",
        factory=_ping,
        success_message="Weather API is reachable.",
    )


async def check_database() -> IntegrationCheckResult:
    """Run ``SELECT 1`` against the configured database."""

    from closet.db.session import engine

    async def _ping() -> bool:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar_one() == 1

    return await _run_check(
        name="Database",
        factory=_ping,
        success_message="Database is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return await asyncio.gather(check_weather(), check_database())
