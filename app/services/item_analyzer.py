from __future__ import annotations

import asyncio
import io
import logging
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from app.core.config import settings
from app.core.errors import (
    AnalysisFailedError,
    AnalysisTimeoutError,
    ConfigurationError,
    ValidationError,
)
from app.core.rate_limit import RATE_LIMITS, RateLimiter
from app.core.retry import RetryExhausted, RetryPolicy
from app.core.taxonomy import normalize_item_type, normalize_material
from app.llm.base import GenerativeModel
from app.llm.parsing import parse_model_json
from app.llm.prompt_templates import build_analysis_prompt
from app.llm.types import ModelRequest
from app.schemas.items import ItemMetadata

logger = logging.getLogger("uvicorn.error")


def _retryable(exc: BaseException) -> bool:
    # timeouts are terminal; a missing key will not appear between attempts
    return not isinstance(exc, (AnalysisTimeoutError, ConfigurationError))


def default_retry_policy() -> RetryPolicy:
    return RetryPolicy(
        max_attempts=settings.LLM_ANALYSIS_MAX_RETRIES + 1,
        base_delay_s=settings.LLM_ANALYSIS_INITIAL_DELAY_S,
        multiplier=2.0,
        is_retryable=_retryable,
    )


def prepare_image(data: bytes, mime_type: str, max_side: Optional[int] = None) -> tuple[bytes, str]:
    """Check the upload decodes as an image and shrink it to max_side."""
    max_side = max_side or settings.LLM_VISION_IMAGE_MAX
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("Unreadable image", [{"field": "file", "message": "File must be an image"}]) from e
    if max(img.size) <= max_side:
        return data, mime_type
    img = img.convert("RGB")
    img.thumbnail((max_side, max_side))
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=90)
    return buf.getvalue(), "image/jpeg"


def _as_insulation(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return max(0, min(10, int(round(float(value)))))
    except (TypeError, ValueError):
        return None


def to_item_metadata(analysis: Dict[str, Any]) -> ItemMetadata:
    style_tags = analysis.get("style_tags") or []
    seasons = analysis.get("season_tags")
    return ItemMetadata(
        detected_type=normalize_item_type(analysis.get("category")),
        detected_color=analysis.get("color") or "#000000",
        detected_material=normalize_material(analysis.get("material")),
        detected_style_tags=[str(t) for t in style_tags] if isinstance(style_tags, list) else [],
        detected_pattern=analysis.get("pattern"),
        detected_fit=analysis.get("fit"),
        detected_season=[str(s) for s in seasons] if isinstance(seasons, list) else None,
        detected_insulation=_as_insulation(analysis.get("formality_insulation_value")),
        detected_description=analysis.get("description"),
        detected_name=analysis.get("name"),
    )


class ItemAnalyzer:
    def __init__(
        self,
        provider: GenerativeModel,
        limiter: RateLimiter,
        retry_policy: Optional[RetryPolicy] = None,
        timeout_s: Optional[float] = None,
    ):
        self.provider = provider
        self.limiter = limiter
        self.retry_policy = retry_policy or default_retry_policy()
        self.timeout_s = timeout_s if timeout_s is not None else settings.LLM_ANALYSIS_TIMEOUT_S
        self.attempts = 0

    async def _attempt(self, image_bytes: bytes, mime_type: str) -> ItemMetadata:
        self.attempts += 1
        self.provider.ensure_configured()
        name = getattr(self.provider, "name", "gemini")
        await self.limiter.wait(name, RATE_LIMITS.get(name, RATE_LIMITS["gemini"]))
        req = ModelRequest(
            prompt=build_analysis_prompt(),
            image_bytes=image_bytes,
            mime_type=mime_type,
            temperature=settings.LLM_ANALYSIS_TEMPERATURE,
            top_p=settings.LLM_ANALYSIS_TOP_P,
            max_output_tokens=settings.LLM_ANALYSIS_MAX_OUTPUT_TOKENS,
            json_response=True,
            timeout_s=self.timeout_s,
        )
        try:
            text = await asyncio.wait_for(self.provider.generate(req), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            raise AnalysisTimeoutError(f"AI analysis timed out after {self.timeout_s:g} seconds") from e
        return to_item_metadata(parse_model_json(text))

    async def analyze(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> ItemMetadata:
        image_bytes, mime_type = prepare_image(image_bytes, mime_type)
        self.attempts = 0
        try:
            return await self.retry_policy.run(lambda: self._attempt(image_bytes, mime_type), label="analyze")
        except AnalysisTimeoutError:
            logger.error("analyze: timed out after %ss attempts=%s", self.timeout_s, self.attempts)
            raise
        except RetryExhausted as e:
            logger.error("analyze: failed after all retries reason=%s", e.last_error)
            raise AnalysisFailedError(
                f"AI analysis failed after {e.attempts} attempts: {e.last_error}", attempts=e.attempts
            ) from e.last_error
