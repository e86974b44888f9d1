from fastapi import APIRouter, Depends, Query

from app.auth.deps import get_current_user_id
from app.core.rate_limit import RateLimiter, get_rate_limiter
from app.schemas.common import Envelope, ok
from app.schemas.weather import WeatherReport
from app.services.weather import WeatherService

router = APIRouter(prefix="/weather", tags=["weather"])


def get_weather_service(limiter: RateLimiter = Depends(get_rate_limiter)) -> WeatherService:
    return WeatherService(limiter)


@router.get("", response_model=Envelope[WeatherReport])
async def get_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    user_id: str = Depends(get_current_user_id),
    service: WeatherService = Depends(get_weather_service),
):
    report = await service.fetch(lat, lon)
    return ok(report)
