import json
import re
from typing import Any, Dict

from app.core.errors import MalformedResponseError

_FENCE_RE = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def parse_model_json(text: str) -> Dict[str, Any]:
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise MalformedResponseError("Empty response from model")
    try:
        data = json.loads(cleaned)
    except ValueError as e:
        raise MalformedResponseError(f"Model response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError("Model response is not a JSON object")
    return data
