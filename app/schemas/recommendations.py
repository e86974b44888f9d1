from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

from app.schemas.items import ItemOut


class RecommendationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    occasion: str = Field(min_length=1)
    locked_items: List[str] = Field(default_factory=list, alias="lockedItems")
    weather: Optional[str] = None
    season: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)


class OutfitReasoning(BaseModel):
    model_config = ConfigDict(extra="allow")
    # free text from the model; some models nest objects here
    weatherMatch: Optional[Any] = None
    colorAnalysis: Optional[Any] = None
    silhouetteBalance: Optional[Any] = None
    styleScore: Optional[Any] = None
    layeringStrategy: Optional[Any] = None
    occasionFit: Optional[Any] = None
    statementPiece: Optional[Any] = None


class RecommendationOut(BaseModel):
    outfit: List[ItemOut]
    validationScore: int
    iterations: int
    analysisLog: List[str]
    reasoning: Optional[OutfitReasoning] = None
