import asyncio
import base64
import logging
import time
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.errors import ConfigurationError, ExternalServiceError
from app.llm.types import ModelRequest

logger = logging.getLogger("uvicorn.error")


class OpenAIProvider:
    name = "openai"

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.client = client
        self.model = model or settings.OPENAI_MODEL

    def ensure_configured(self) -> None:
        if self.client is None and not settings.OPENAI_API_KEY:
            raise ConfigurationError("OpenAI API key not configured")

    def _get_client(self):
        if self.client is None:
            self.ensure_configured()
            from openai import AsyncOpenAI

            self.client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        return self.client

    def _messages(self, req: ModelRequest) -> List[Dict[str, Any]]:
        if req.image_bytes is None:
            return [{"role": "user", "content": req.prompt}]
        data_url = f"data:{req.mime_type or 'image/jpeg'};base64,{base64.b64encode(req.image_bytes).decode('ascii')}"
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": req.prompt},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ],
            }
        ]

    async def generate(self, req: ModelRequest) -> str:
        import openai

        client = self._get_client()
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": self._messages(req),
            # chat completions caps temperature at 2.0
            "temperature": min(req.temperature, 2.0),
        }
        if req.top_p is not None:
            kwargs["top_p"] = req.top_p
        if req.max_output_tokens is not None:
            kwargs["max_tokens"] = req.max_output_tokens
        if req.json_response:
            kwargs["response_format"] = {"type": "json_object"}
        if req.timeout_s is not None:
            kwargs["timeout"] = req.timeout_s
        start = time.perf_counter()
        logger.info("llm:openai request model=%s image=%s", self.model, req.image_bytes is not None)
        try:
            resp = await client.chat.completions.create(**kwargs)
        except openai.APITimeoutError as e:
            logger.warning("llm:openai timeout model=%s timeout_s=%s", self.model, req.timeout_s)
            raise asyncio.TimeoutError() from e
        except openai.OpenAIError as e:
            raise ExternalServiceError(f"OpenAI API error: {e}", service="openai") from e
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info("llm:openai response latency_ms=%s", latency_ms)
        return resp.choices[0].message.content if resp.choices else ""
