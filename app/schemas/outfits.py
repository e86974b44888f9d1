from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict
from datetime import date

from app.schemas.items import ItemOut


class OutfitLogIn(BaseModel):
    item_ids: List[int] = Field(min_length=1)
    outfit_date: Optional[date] = None
    feedback: Optional[int] = Field(None, ge=1, le=5)
    weather_data: Optional[Dict[str, Any]] = None


class OutfitHistoryEntry(BaseModel):
    id: int
    outfit_date: str
    feedback: Optional[int] = None
    weather_data: Optional[Dict[str, Any]] = None
    items: List[ItemOut]
