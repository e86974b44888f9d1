"""Outfit generation: one model round trip plus structural repair.

The model picks item ids from the wardrobe; we map them back to items, force
locked items in, warn when the outfit lacks a top or a bottom and normalize
the model's style score. Nothing is persisted here.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from app.core.config import settings
from app.core.errors import AppError, ExternalServiceError, MalformedResponseError, ValidationError
from app.core.rate_limit import RATE_LIMITS, RateLimiter
from app.core.taxonomy import BOTTOM_ALIASES, TOP_ALIASES
from app.llm.base import GenerativeModel
from app.llm.parsing import parse_model_json
from app.llm.prompt_templates import PROMPT_VERSION, build_recommendation_prompt
from app.llm.types import ModelRequest
from app.schemas.profile import UserPreferences
from app.services.locks import enforce_locked_items
from app.services.scoring import normalize_style_score

logger = logging.getLogger("uvicorn.error")


@dataclass
class RecommendationContext:
    weather: str
    occasion: str
    season: str
    preferences: Optional[UserPreferences] = None
    locked_item_ids: List[str] = field(default_factory=list)


@dataclass
class RecommendationResult:
    items: List[Any]
    score: int
    reasoning: Dict[str, Any]
    iterations: int = 1
    log: List[str] = field(default_factory=list)

    @property
    def item_ids(self) -> List[str]:
        return [str(i.id) for i in self.items]


def has_top_and_bottom(items: Sequence[Any]) -> tuple[bool, bool]:
    types = [(i.type or "").lower() for i in items]
    has_top = any(t in TOP_ALIASES for t in types)
    has_bottom = any(t in BOTTOM_ALIASES for t in types)
    return has_top, has_bottom


class OutfitRecommender:
    def __init__(self, provider: GenerativeModel, limiter: RateLimiter):
        self.provider = provider
        self.limiter = limiter

    async def _call_model(self, prompt: str) -> str:
        self.provider.ensure_configured()
        name = getattr(self.provider, "name", "gemini")
        await self.limiter.wait(name, RATE_LIMITS.get(name, RATE_LIMITS["gemini"]))
        req = ModelRequest(
            prompt=prompt,
            temperature=settings.LLM_RECOMMEND_TEMPERATURE,
            top_k=settings.LLM_RECOMMEND_TOP_K,
            json_response=True,
        )
        try:
            return await self.provider.generate(req)
        except asyncio.TimeoutError as e:
            raise ExternalServiceError("Model call timed out", service=name) from e

    async def generate(self, wardrobe: Sequence[Any], context: RecommendationContext) -> RecommendationResult:
        log: List[str] = ["Starting AI outfit recommendation (Fire Fit Engine)..."]
        if not wardrobe:
            raise ValidationError(
                "Wardrobe is empty",
                [{"field": "wardrobe", "message": "Add items before requesting an outfit"}],
            )
        prompt = build_recommendation_prompt(
            wardrobe,
            weather=context.weather,
            occasion=context.occasion,
            season=context.season,
            preferences=context.preferences,
            locked_ids=context.locked_item_ids,
        )
        log.append(f"Generating outfit with {getattr(self.provider, 'name', 'model')}...")
        try:
            text = await self._call_model(prompt)
            payload = parse_model_json(text)
        except AppError as e:
            logger.warning("recommend: generation failed reason=%s", e)
            log.append(f"Error: {e}")
            raise

        selected_ids = payload.get("selectedItemIds")
        if not isinstance(selected_ids, list):
            raise MalformedResponseError("Invalid AI response format: selectedItemIds must be a list")
        wanted = {str(i) for i in selected_ids}
        selected = [item for item in wardrobe if str(item.id) in wanted]

        enforcement = enforce_locked_items(selected, wardrobe, context.locked_item_ids)
        if enforcement.added:
            log.append(f"Enforcing {len(enforcement.added)} locked items that AI missed.")
            logger.info(
                "recommend: locked items enforced added=%s replaced=%s", enforcement.added, enforcement.removed
            )
        items = enforcement.items

        has_top, has_bottom = has_top_and_bottom(items)
        if not has_top or not has_bottom:
            log.append("AI returned incomplete outfit (missing top or bottom)")
            logger.warning("recommend: incomplete outfit has_top=%s has_bottom=%s", has_top, has_bottom)

        reasoning = payload.get("reasoning")
        if not isinstance(reasoning, dict):
            reasoning = {}
        score = normalize_style_score(reasoning.get("styleScore"))
        logger.info("recommend: generated prompt=%s items=%s score=%s", PROMPT_VERSION, len(items), score)
        log.append(f"Generated outfit with score {score}%")
        log.append(f"Items: {', '.join(str(i.name) for i in items)}")
        return RecommendationResult(items=items, score=score, reasoning=reasoning, iterations=1, log=log)
