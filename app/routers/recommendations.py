import logging
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.core.rate_limit import RateLimiter, get_rate_limiter
from app.core.taxonomy import season_for
from app.llm.base import GenerativeModel, get_model_provider
from app.models.models import ClothingItem, OutfitRecommendation, Profile
from app.routers.items_helpers import _build_items_out
from app.routers.weather import get_weather_service
from app.schemas.common import Envelope, ok
from app.schemas.profile import UserPreferences
from app.schemas.recommendations import OutfitReasoning, RecommendationIn, RecommendationOut
from app.services.recommender import OutfitRecommender, RecommendationContext
from app.services.weather import WeatherService, summarize

router = APIRouter(prefix="/recommendations", tags=["recommendations"])
logger = logging.getLogger("uvicorn.error")


def get_recommender(
    provider: GenerativeModel = Depends(get_model_provider),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> OutfitRecommender:
    return OutfitRecommender(provider, limiter)


async def _weather_summary(payload: RecommendationIn, weather: WeatherService) -> str:
    if payload.weather:
        return payload.weather
    if payload.lat is not None and payload.lon is not None:
        report = await weather.fetch(payload.lat, payload.lon)
        return summarize(report.weather)
    return "Unknown"


@router.post("", response_model=Envelope[RecommendationOut])
async def recommend_outfit(
    payload: RecommendationIn,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    recommender: OutfitRecommender = Depends(get_recommender),
    weather: WeatherService = Depends(get_weather_service),
):
    res = await session.execute(
        select(ClothingItem).where(ClothingItem.user_id == user_id).order_by(ClothingItem.id)
    )
    wardrobe = res.scalars().all()
    profile = await session.get(Profile, user_id)
    preferences = UserPreferences.model_validate(profile.preferences) if profile and profile.preferences else None

    context = RecommendationContext(
        weather=await _weather_summary(payload, weather),
        occasion=payload.occasion,
        season=payload.season or season_for(date.today().month),
        preferences=preferences,
        locked_item_ids=[str(i) for i in payload.locked_items],
    )
    result = await recommender.generate(wardrobe, context)
    out = RecommendationOut(
        outfit=_build_items_out(result.items),
        validationScore=result.score,
        iterations=result.iterations,
        analysisLog=result.log,
        reasoning=OutfitReasoning.model_validate(result.reasoning),
    )

    session.add(
        OutfitRecommendation(
            user_id=user_id,
            occasion=context.occasion,
            weather=context.weather,
            item_ids=result.item_ids,
            locked_item_ids=context.locked_item_ids,
            score=result.score,
            reasoning=result.reasoning,
            provider=getattr(recommender.provider, "name", None),
        )
    )
    await session.commit()
    logger.info("recommend: user=%s items=%s score=%s", user_id, result.item_ids, result.score)

    return ok(out)
