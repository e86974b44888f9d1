from pydantic import BaseModel, Field
from typing import Optional, List


class UserPreferences(BaseModel):
    gender: str = "NEUTRAL"
    preferred_silhouette: str = "neutral"
    preferred_styles: List[str] = Field(default_factory=lambda: ["Streetwear", "Vintage"])
    preferred_color_palette: str = "Neutral"


class ProfileIn(BaseModel):
    name: Optional[str] = None
    region: Optional[str] = None
    avatar_url: Optional[str] = None
    preferences: Optional[UserPreferences] = None


class ProfileOut(BaseModel):
    user_id: str
    name: Optional[str] = None
    region: Optional[str] = None
    avatar_url: Optional[str] = None
    preferences: Optional[UserPreferences] = None
    updated_at: Optional[str] = None
