from datetime import datetime, timezone

import httpx
import pytest

from app.schemas.weather import WeatherData
from app.services.weather import WeatherService, generate_alerts, mock_report, summarize
from tests.fixtures import NoopLimiter

NOON = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
MIDNIGHT = datetime(2026, 6, 1, 0, 30, tzinfo=timezone.utc)


def _weather(uv=0, aqi=0):
    return WeatherData(
        temperature=20,
        feels_like=19,
        humidity=40,
        wind_speed=12,
        uv_index=uv,
        air_quality_index=aqi,
        weather_condition="Clear",
        fetched_at=NOON.isoformat(),
        provider="test",
        city="Testville",
    )


def _handler(current=None, status=200, air=None):
    seen = []

    def handle(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/air_pollution"):
            if air is None:
                return httpx.Response(500, json={})
            return httpx.Response(200, json=air)
        return httpx.Response(status, json=current or {})

    return handle, seen


CURRENT = {
    "name": "Lisbon",
    "main": {"temp": 21.6, "feels_like": 20.4, "humidity": 55},
    "wind": {"speed": 5},
    "weather": [{"description": "scattered clouds"}],
}


@pytest.mark.parametrize(
    "uv, aqi, expected",
    [
        (0, 0, []),
        (6, 0, [("UV", "moderate")]),
        (8, 0, [("UV", "high")]),
        (0, 101, [("AQI", "moderate")]),
        (0, 201, [("AQI", "high")]),
        (9, 250, [("UV", "high"), ("AQI", "high")]),
        (5.9, 100, []),
    ],
)
def test_alert_thresholds(uv, aqi, expected):
    alerts = generate_alerts(_weather(uv=uv, aqi=aqi))
    assert [(a.type, a.severity) for a in alerts] == expected


def test_mock_report_day_and_night():
    day = mock_report(NOON).weather
    night = mock_report(MIDNIGHT).weather
    assert (day.temperature, day.weather_condition, day.uv_index) == (22, "Sunny", 5)
    assert (night.temperature, night.weather_condition, night.uv_index) == (18, "Clear", 0)
    assert day.is_mock and day.city == "Demo Location"


def test_summary_line():
    assert summarize(_weather()) == "20°C, clear, feels like 19°C, humidity 40%, wind 12 km/h"


@pytest.mark.asyncio
async def test_no_api_key_returns_mock():
    handle, seen = _handler(CURRENT)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handle)) as client:
        service = WeatherService(NoopLimiter(), client=client, api_key="", now=lambda: NOON)
        report = await service.fetch(38.7, -9.1)
    assert report.weather.is_mock
    assert seen == []


@pytest.mark.asyncio
async def test_fetch_maps_openweather_payload():
    handle, seen = _handler(CURRENT, air={"list": [{"main": {"aqi": 3}}]})
    limiter = NoopLimiter()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handle)) as client:
        service = WeatherService(limiter, client=client, api_key="k", now=lambda: NOON)
        report = await service.fetch(38.7, -9.1)
    w = report.weather
    assert (w.temperature, w.feels_like, w.humidity) == (22, 20, 55)
    assert w.wind_speed == 18
    assert w.weather_condition == "scattered clouds"
    assert w.city == "Lisbon"
    assert w.air_quality_index == 150
    assert not w.is_mock
    assert [(a.type, a.severity) for a in report.alerts] == [("AQI", "moderate")]
    assert limiter.waits == ["openweather"]
    assert seen[0].url.params["units"] == "metric"
    assert seen[0].url.params["appid"] == "k"


@pytest.mark.asyncio
async def test_air_quality_failure_keeps_conditions():
    handle, _ = _handler(CURRENT, air=None)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handle)) as client:
        service = WeatherService(NoopLimiter(), client=client, api_key="k", now=lambda: NOON)
        report = await service.fetch(38.7, -9.1)
    assert report.weather.city == "Lisbon"
    assert report.weather.air_quality_index == 0


@pytest.mark.asyncio
async def test_upstream_error_falls_back_to_mock():
    handle, _ = _handler({"message": "bad key"}, status=401)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handle)) as client:
        service = WeatherService(NoopLimiter(), client=client, api_key="k", now=lambda: NOON)
        report = await service.fetch(38.7, -9.1)
    assert report.weather.is_mock
