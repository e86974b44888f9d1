from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from app.core.taxonomy import DRESS_CODES, SEASONS, normalize_material, normalize_seasons
from app.models.models import ClothingItem
from app.schemas.items import ItemCreate, ItemOut, ItemUpdate
from app.storage import blob

logger = logging.getLogger("uvicorn.error")


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _image_url(item: ClothingItem, sign: bool, s3=None) -> Optional[str]:
    if not sign:
        return item.image_url
    key = item.image_path or blob.key_from_url(item.image_url)
    if not key:
        return item.image_url
    try:
        return blob.signed_url(key, client=s3)
    except (BotoCoreError, ClientError) as e:
        logger.warning("wardrobe: signing failed item=%s reason=%s", item.id, e)
        return item.image_url


def _build_item_out(item: ClothingItem, sign: bool = True, s3=None) -> ItemOut:
    return ItemOut(
        id=item.id,
        name=item.name,
        type=item.type,
        category=item.category,
        color=item.color,
        material=item.material,
        pattern=item.pattern,
        fit=item.fit,
        style=item.style,
        description=item.description,
        season_tags=item.season_tags,
        style_tags=item.style_tags,
        dress_code=item.dress_code,
        occasion=item.occasion,
        insulation_value=item.insulation_value,
        is_favorite=bool(item.is_favorite),
        wear_count=item.wear_count or 0,
        last_worn=_iso(item.last_worn),
        image_url=_image_url(item, sign, s3),
        created_at=_iso(item.created_at),
    )


def _build_items_out(items: List[ClothingItem]) -> List[ItemOut]:
    """Sign every image with one shared S3 client."""
    s3 = None
    if items:
        try:
            s3 = blob.storage_client()
        except BotoCoreError as e:
            logger.warning("wardrobe: storage client unavailable reason=%s", e)
    return [_build_item_out(i, s3=s3) for i in items]

def _dress_code_errors(dress_code: Optional[List[str]]) -> List[Dict[str, Any]]:
    bad = [d for d in dress_code or [] if d not in DRESS_CODES]
    if not bad:
        return []
    return [{"field": "dress_code", "message": f"Invalid dress code: {', '.join(bad)}"}]


def _item_values(payload: ItemCreate | ItemUpdate, partial: bool) -> Dict[str, Any]:
    data = payload.model_dump(exclude_unset=partial)
    if "material" in data and data["material"]:
        data["material"] = normalize_material(data["material"])
    if "season_tags" in data:
        seasons = normalize_seasons(data["season_tags"])
        if seasons is None and not partial:
            seasons = list(SEASONS)
        data["season_tags"] = seasons
    if not partial:
        if data.get("insulation_value") is None:
            data["insulation_value"] = 5
        if not data.get("image_path"):
            data["image_path"] = blob.key_from_url(data.get("image_url"))
    elif "image_url" in data:
        data["image_path"] = blob.key_from_url(data["image_url"])
    return data


def _apply_updates(item: ClothingItem, values: Dict[str, Any]) -> None:
    for key, value in values.items():
        setattr(item, key, value)
