"""Tests for external integration connectivity helpers."""

from __future__ import annotations

import pytest
import pytest_mock

from closet.config.settings import get_settings
from closet.integrations.checks import IntegrationCheckResult, check_weather, run_all_checks


@pytest.fixture(autouse=True)
def _setup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_BASE_URL", "https://weather.test/v1")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_check_weather_success(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("closet.integrations.checks.WeatherClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=True)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_weather()

    assert result.success
    instance.ping.assert_awaited_once()
    instance.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_check_weather_non_success(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("closet.integrations.checks.WeatherClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=False)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_weather()

    assert not result.success
    assert "non-success" in result.message.lower()


@pytest.mark.asyncio
async def test_check_weather_error_is_reported(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("closet.integrations.checks.WeatherClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(side_effect=RuntimeError("provider down"))
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_weather()

    assert not result.success
    assert result.message == "provider down"
    instance.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_run_all_checks_reports_each_integration(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("closet.integrations.checks.WeatherClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=True)
    instance.close = mocker.AsyncMock(return_value=None)
    mocker.patch(
        "closet.integrations.checks.check_database",
        mocker.AsyncMock(return_value=IntegrationCheckResult("Database", False, "unreachable")),
    )

    results = await run_all_checks()

    assert [(result.name, result.success) for result in results] == [("Open-Meteo", True), ("Database", False)]
