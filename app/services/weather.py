from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

import httpx

from app.core.config import settings
from app.core.rate_limit import RATE_LIMITS, RateLimiter
from app.schemas.weather import WeatherAlert, WeatherData, WeatherReport

logger = logging.getLogger("uvicorn.error")


def generate_alerts(weather: WeatherData) -> List[WeatherAlert]:
    alerts: List[WeatherAlert] = []
    if weather.uv_index >= settings.ALERT_UV_VERY_HIGH:
        alerts.append(
            WeatherAlert(
                type="UV",
                severity="high",
                message="Very high UV index detected",
                recommendation="Wear a brimmed hat and sunglasses. Consider sunscreen.",
            )
        )
    elif weather.uv_index >= settings.ALERT_UV_HIGH:
        alerts.append(
            WeatherAlert(
                type="UV",
                severity="moderate",
                message="High UV index detected",
                recommendation="Consider wearing a hat or sunglasses for extended outdoor exposure.",
            )
        )
    if weather.air_quality_index >= settings.ALERT_AQI_VERY_UNHEALTHY:
        alerts.append(
            WeatherAlert(
                type="AQI",
                severity="high",
                message="Very unhealthy air quality",
                recommendation="Wear outerwear with a hood or a light scarf to minimize exposure.",
            )
        )
    elif weather.air_quality_index >= settings.ALERT_AQI_UNHEALTHY:
        alerts.append(
            WeatherAlert(
                type="AQI",
                severity="moderate",
                message="Unhealthy air quality for sensitive groups",
                recommendation="Consider covering up if you have respiratory sensitivities.",
            )
        )
    return alerts


def mock_report(now: datetime) -> WeatherReport:
    is_day = 6 < now.hour < 18
    weather = WeatherData(
        temperature=22 if is_day else 18,
        feels_like=22 if is_day else 18,
        humidity=50,
        wind_speed=10,
        uv_index=5 if is_day else 0,
        air_quality_index=50,
        pollen_count=2,
        weather_condition="Sunny" if is_day else "Clear",
        fetched_at=now.isoformat(),
        provider="mock",
        is_mock=True,
        city="Demo Location",
    )
    return WeatherReport(weather=weather, alerts=[])


def summarize(weather: WeatherData) -> str:
    return (
        f"{weather.temperature}°C, {weather.weather_condition.lower()}, "
        f"feels like {weather.feels_like}°C, humidity {weather.humidity}%, wind {weather.wind_speed} km/h"
    )


class WeatherService:
    def __init__(
        self,
        limiter: RateLimiter,
        client: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.limiter = limiter
        self.client = client
        self.api_key = api_key if api_key is not None else settings.OPENWEATHER_API_KEY
        self.base_url = settings.OPENWEATHER_BASE_URL.rstrip("/")
        self._now = now

    async def fetch(self, lat: float, lon: float) -> WeatherReport:
        if not self.api_key:
            logger.warning("weather: OPENWEATHER_API_KEY not set, using mock data")
            return mock_report(self._now())
        client = self.client or httpx.AsyncClient(timeout=settings.WEATHER_TIMEOUT_S)
        try:
            return await self._fetch(client, lat, lon)
        finally:
            if self.client is None:
                await client.aclose()

    async def _fetch(self, client: httpx.AsyncClient, lat: float, lon: float) -> WeatherReport:
        await self.limiter.wait("openweather", RATE_LIMITS["openweather"])
        params = {"lat": lat, "lon": lon, "appid": self.api_key}
        try:
            resp = await client.get(f"{self.base_url}/weather", params={**params, "units": "metric"})
        except httpx.HTTPError as e:
            logger.error("weather: request failed reason=%s", e)
            return mock_report(self._now())
        if resp.status_code >= 400:
            logger.error("weather: upstream error status=%s body=%s", resp.status_code, resp.text[:200])
            return mock_report(self._now())
        try:
            data = resp.json()
            fetched_at = self._now()
            conditions = data.get("weather") or [{}]
            weather = WeatherData(
                temperature=round(data["main"]["temp"]),
                feels_like=round(data["main"]["feels_like"]),
                humidity=int(data["main"]["humidity"]),
                wind_speed=round(float(data.get("wind", {}).get("speed", 0)) * 3.6),
                uv_index=0,
                air_quality_index=0,
                pollen_count=0,
                weather_condition=conditions[0].get("description") or "Unknown",
                fetched_at=fetched_at.isoformat(),
                provider="openWeather",
                is_mock=False,
                city=data.get("name") or "Unknown",
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.error("weather: unexpected payload reason=%s", e)
            return mock_report(self._now())

        # AQI is optional; failures keep the current conditions
        try:
            aqi_resp = await client.get(f"{self.base_url}/air_pollution", params=params)
            if aqi_resp.status_code < 400:
                aqi_list = aqi_resp.json().get("list") or [{}]
                aqi = (aqi_list[0].get("main") or {}).get("aqi") or 1
                # 1-5 scale to the approximate 0-500 AQI range
                weather.air_quality_index = int(aqi) * 50
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            logger.warning("weather: aqi fetch failed reason=%s", e)

        return WeatherReport(weather=weather, alerts=generate_alerts(weather))
