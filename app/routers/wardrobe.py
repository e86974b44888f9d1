import logging
from typing import List

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.core.errors import NotFoundError, ValidationError
from app.core.rate_limit import RateLimiter, get_rate_limiter
from app.llm.base import GenerativeModel, get_model_provider
from app.models.models import ClothingItem
from app.routers.items_helpers import _apply_updates, _build_item_out, _build_items_out, _dress_code_errors, _item_values
from app.schemas.common import Envelope, ok
from app.schemas.items import ItemCreate, ItemMetadata, ItemOut, ItemUpdate, UploadOut
from app.services.item_analyzer import ItemAnalyzer
from app.storage.blob import delete_object, key_from_url, upload_image, validate_upload

router = APIRouter(prefix="/wardrobe", tags=["wardrobe"])
logger = logging.getLogger("uvicorn.error")


def get_item_analyzer(
    provider: GenerativeModel = Depends(get_model_provider),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ItemAnalyzer:
    return ItemAnalyzer(provider, limiter)


async def _get_owned(session: AsyncSession, user_id: str, item_id: int) -> ClothingItem:
    res = await session.execute(
        select(ClothingItem).where(ClothingItem.id == item_id, ClothingItem.user_id == user_id)
    )
    item = res.scalar_one_or_none()
    if not item:
        raise NotFoundError("Item not found")
    return item


@router.get("", response_model=Envelope[List[ItemOut]])
async def list_items(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    res = await session.execute(
        select(ClothingItem)
        .where(ClothingItem.user_id == user_id)
        .order_by(ClothingItem.created_at.desc(), ClothingItem.id.desc())
    )
    items = res.scalars().all()
    return ok(_build_items_out(items))


@router.post("", response_model=Envelope[ItemOut], status_code=201)
async def create_item(
    payload: ItemCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    errors = _dress_code_errors(payload.dress_code)
    if errors:
        raise ValidationError("Validation failed", errors)
    item = ClothingItem(user_id=user_id, **_item_values(payload, partial=False))
    session.add(item)
    await session.commit()
    await session.refresh(item)
    logger.info("wardrobe: created item=%s user=%s type=%s", item.id, user_id, item.type)
    return ok(_build_item_out(item), message="Item added to wardrobe")


@router.post("/upload", response_model=Envelope[UploadOut], status_code=201)
async def upload_item_image(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
):
    data = await file.read()
    stored = await run_in_threadpool(upload_image, user_id, data, file.content_type)
    logger.info("wardrobe: uploaded key=%s bytes=%s", stored.key, len(data))
    return ok(UploadOut(key=stored.key, url=stored.url))


@router.post("/analyze", response_model=Envelope[ItemMetadata])
async def analyze_item_image(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    analyzer: ItemAnalyzer = Depends(get_item_analyzer),
):
    data = await file.read()
    content_type = validate_upload(data, file.content_type)
    metadata = await analyzer.analyze(data, content_type)
    logger.info("analyze: user=%s type=%s attempts=%s", user_id, metadata.detected_type, analyzer.attempts)
    return ok(metadata)


@router.get("/{item_id}", response_model=Envelope[ItemOut])
async def get_item(
    item_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    item = await _get_owned(session, user_id, item_id)
    return ok(_build_item_out(item))


@router.patch("/{item_id}", response_model=Envelope[ItemOut])
async def update_item(
    item_id: int,
    payload: ItemUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    errors = _dress_code_errors(payload.dress_code)
    if errors:
        raise ValidationError("Validation failed", errors)
    item = await _get_owned(session, user_id, item_id)
    _apply_updates(item, _item_values(payload, partial=True))
    await session.commit()
    await session.refresh(item)
    return ok(_build_item_out(item), message="Item updated")


@router.delete("/{item_id}", response_model=Envelope[dict])
async def delete_item(
    item_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    item = await _get_owned(session, user_id, item_id)
    key = item.image_path or key_from_url(item.image_url)
    await session.delete(item)
    await session.commit()
    if key:
        # the row is gone either way; a dangling object is only logged
        try:
            await run_in_threadpool(delete_object, key)
        except (BotoCoreError, ClientError) as e:
            logger.warning("wardrobe: image cleanup failed key=%s reason=%s", key, e)
    return ok({"id": item_id}, message="Item deleted")
