from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.models import Outfit, OutfitRecommendation

logger = logging.getLogger("uvicorn.error")


@dataclass
class RetentionResult:
    recommendations_deleted: int
    outfits_deleted: int


async def apply_retention_policy(session: AsyncSession, now: Optional[datetime] = None) -> RetentionResult:
    now = now or datetime.now(timezone.utc)
    rec_cutoff = now - timedelta(days=settings.RETENTION_RECOMMENDATION_DAYS)
    outfit_cutoff = now - timedelta(days=settings.RETENTION_OUTFIT_DAYS)
    recs = await session.execute(delete(OutfitRecommendation).where(OutfitRecommendation.created_at < rec_cutoff))
    outfits = await session.execute(delete(Outfit).where(Outfit.created_at < outfit_cutoff))
    await session.commit()
    result = RetentionResult(recommendations_deleted=recs.rowcount or 0, outfits_deleted=outfits.rowcount or 0)
    logger.info(
        "retention: deleted recommendations=%s outfits=%s",
        result.recommendations_deleted,
        result.outfits_deleted,
    )
    return result
