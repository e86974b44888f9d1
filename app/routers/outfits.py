import logging
from datetime import date, datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.core.errors import NotFoundError, ValidationError
from app.models.models import ClothingItem, Outfit, OutfitItem
from app.routers.items_helpers import _build_item_out
from app.schemas.common import Envelope, ok
from app.schemas.outfits import OutfitHistoryEntry, OutfitLogIn

router = APIRouter(prefix="/outfits", tags=["outfits"])
logger = logging.getLogger("uvicorn.error")

HISTORY_DEFAULT_LIMIT = 50
HISTORY_MAX_LIMIT = 200


def clamp_limit(limit: int) -> int:
    return max(1, min(HISTORY_MAX_LIMIT, limit))


def _history_entry(outfit: Outfit, items: List[ClothingItem]) -> OutfitHistoryEntry:
    return OutfitHistoryEntry(
        id=outfit.id,
        outfit_date=outfit.outfit_date.isoformat(),
        feedback=outfit.feedback,
        weather_data=outfit.weather_data,
        items=[_build_item_out(i, sign=False) for i in items],
    )


@router.post("", response_model=Envelope[OutfitHistoryEntry], status_code=201)
async def log_outfit(
    payload: OutfitLogIn,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    item_ids = list(dict.fromkeys(payload.item_ids))
    res = await session.execute(
        select(ClothingItem).where(ClothingItem.user_id == user_id, ClothingItem.id.in_(item_ids))
    )
    by_id = {i.id: i for i in res.scalars().all()}
    missing = [i for i in item_ids if i not in by_id]
    if missing:
        raise ValidationError(
            "Validation failed",
            [{"field": "item_ids", "message": f"Unknown items: {', '.join(str(i) for i in missing)}"}],
        )

    outfit = Outfit(
        user_id=user_id,
        outfit_date=payload.outfit_date or date.today(),
        feedback=payload.feedback,
        weather_data=payload.weather_data,
        items=[OutfitItem(clothing_item=by_id[i], position=pos) for pos, i in enumerate(item_ids)],
    )
    session.add(outfit)
    now = datetime.now(timezone.utc)
    # counted in the database so concurrent logs do not lose increments
    await session.execute(
        update(ClothingItem)
        .where(ClothingItem.user_id == user_id, ClothingItem.id.in_(item_ids))
        .values(wear_count=ClothingItem.wear_count + 1, last_worn=now)
        .execution_options(synchronize_session=False)
    )
    await session.commit()

    res = await session.execute(
        select(ClothingItem)
        .where(ClothingItem.id.in_(item_ids))
        .execution_options(populate_existing=True)
    )
    fresh = {i.id: i for i in res.scalars().all()}
    logger.info("outfits: logged outfit=%s user=%s items=%s", outfit.id, user_id, item_ids)
    return ok(_history_entry(outfit, [fresh[i] for i in item_ids]), message="Outfit logged")


@router.get("/history", response_model=Envelope[List[OutfitHistoryEntry]])
async def outfit_history(
    limit: int = Query(HISTORY_DEFAULT_LIMIT),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    res = await session.execute(
        select(Outfit)
        .where(Outfit.user_id == user_id)
        .order_by(Outfit.outfit_date.desc(), Outfit.id.desc())
        .limit(clamp_limit(limit))
    )
    outfits = res.scalars().all()
    entries = []
    for outfit in outfits:
        links = sorted(outfit.items, key=lambda link: link.position)
        entries.append(_history_entry(outfit, [link.clothing_item for link in links if link.clothing_item]))
    return ok(entries)


@router.delete("/{outfit_id}", response_model=Envelope[dict])
async def delete_outfit(
    outfit_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    res = await session.execute(select(Outfit).where(Outfit.id == outfit_id, Outfit.user_id == user_id))
    outfit = res.scalar_one_or_none()
    if not outfit:
        raise NotFoundError("Outfit not found")
    await session.delete(outfit)
    await session.commit()
    return ok({"id": outfit_id}, message="Outfit deleted")
