from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Literal

ItemType = Literal["Outerwear", "Top", "Bottom", "Footwear", "Accessory", "Headwear", "Dress"]


class ItemCreate(BaseModel):
    name: str = Field(min_length=1)
    type: ItemType
    image_url: str = Field(min_length=1)
    image_path: Optional[str] = None
    category: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    insulation_value: Optional[int] = Field(None, ge=0, le=10)
    season_tags: Optional[List[str]] = None
    style_tags: Optional[List[str]] = None
    dress_code: Optional[List[str]] = None
    pattern: Optional[str] = None
    fit: Optional[str] = None
    style: Optional[str] = None
    occasion: Optional[List[str]] = None
    description: Optional[str] = None
    is_favorite: bool = False


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[ItemType] = None
    category: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    insulation_value: Optional[int] = Field(None, ge=0, le=10)
    image_url: Optional[str] = None
    season_tags: Optional[List[str]] = None
    style_tags: Optional[List[str]] = None
    dress_code: Optional[List[str]] = None
    is_favorite: Optional[bool] = None
    description: Optional[str] = None
    pattern: Optional[str] = None
    fit: Optional[str] = None
    occasion: Optional[List[str]] = None

    @field_validator("name", "type", "image_url", "is_favorite", "insulation_value")
    @classmethod
    def _not_null(cls, v):
        # omitted is fine; an explicit null would violate the column constraint
        if v is None:
            raise ValueError("must not be null")
        return v


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    type: str
    category: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    pattern: Optional[str] = None
    fit: Optional[str] = None
    style: Optional[str] = None
    description: Optional[str] = None
    season_tags: Optional[List[str]] = None
    style_tags: Optional[List[str]] = None
    dress_code: Optional[List[str]] = None
    occasion: Optional[List[str]] = None
    insulation_value: Optional[int] = None
    is_favorite: bool = False
    wear_count: int = 0
    last_worn: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None


class ItemMetadata(BaseModel):
    """Tags extracted from a single clothing photo."""

    detected_type: str
    detected_color: str = "#000000"
    detected_material: str = "Other"
    detected_style_tags: List[str] = Field(default_factory=list)
    detected_pattern: Optional[str] = None
    detected_fit: Optional[str] = None
    detected_season: Optional[List[str]] = None
    detected_insulation: Optional[int] = None
    detected_description: Optional[str] = None
    detected_name: Optional[str] = None


class UploadOut(BaseModel):
    key: str
    url: str
