from typing import Optional
from pydantic import BaseModel


class ModelRequest(BaseModel):
    prompt: str
    image_bytes: Optional[bytes] = None
    mime_type: Optional[str] = None
    temperature: float = 0.7
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None
    json_response: bool = True
    timeout_s: Optional[float] = None
