import asyncio
import base64
import logging
import time
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.core.errors import ConfigurationError, ExternalServiceError, MalformedResponseError
from app.llm.types import ModelRequest

logger = logging.getLogger("uvicorn.error")


class GeminiProvider:
    """generateContent over REST. Transport timeouts surface as asyncio.TimeoutError."""

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.client = client

    def _body(self, req: ModelRequest) -> Dict[str, Any]:
        parts: list[Dict[str, Any]] = [{"text": req.prompt}]
        if req.image_bytes is not None:
            parts.append(
                {
                    "inlineData": {
                        "mimeType": req.mime_type or "image/jpeg",
                        "data": base64.b64encode(req.image_bytes).decode("ascii"),
                    }
                }
            )
        gen: Dict[str, Any] = {"temperature": req.temperature}
        if req.top_p is not None:
            gen["topP"] = req.top_p
        if req.top_k is not None:
            gen["topK"] = req.top_k
        if req.max_output_tokens is not None:
            gen["maxOutputTokens"] = req.max_output_tokens
        if req.json_response:
            gen["responseMimeType"] = "application/json"
        return {"contents": [{"role": "user", "parts": parts}], "generationConfig": gen}

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Gemini API key not configured")

    async def generate(self, req: ModelRequest) -> str:
        self.ensure_configured()
        url = f"{self.base_url}/models/{self.model}:generateContent"
        start = time.perf_counter()
        logger.info("llm:gemini request model=%s image=%s", self.model, req.image_bytes is not None)
        client = self.client or httpx.AsyncClient()
        try:
            resp = await client.post(
                url,
                params={"key": self.api_key},
                json=self._body(req),
                timeout=req.timeout_s or settings.LLM_ANALYSIS_TIMEOUT_S,
            )
        except httpx.TimeoutException as e:
            logger.warning("llm:gemini timeout model=%s timeout_s=%s", self.model, req.timeout_s)
            raise asyncio.TimeoutError() from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Gemini request failed: {e}", service="gemini") from e
        finally:
            if self.client is None:
                await client.aclose()
        latency_ms = int((time.perf_counter() - start) * 1000)
        if resp.status_code >= 400:
            detail = _error_message(resp)
            logger.warning("llm:gemini error status=%s latency_ms=%s detail=%s", resp.status_code, latency_ms, detail)
            raise ExternalServiceError(
                f"Gemini API error: {resp.status_code} - {detail}", service="gemini", status=resp.status_code
            )
        logger.info("llm:gemini response status=%s latency_ms=%s", resp.status_code, latency_ms)
        try:
            data = resp.json()
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError("Invalid response from Gemini API") from e


def _error_message(resp: httpx.Response) -> str:
    try:
        return str(resp.json().get("error", {}).get("message") or "")
    except ValueError:
        return resp.text[:200]
