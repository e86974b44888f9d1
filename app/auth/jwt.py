import jwt
from typing import Any, Dict

from app.core.config import settings


def decode_token(tok: str) -> Dict[str, Any]:
    """Verify an access token issued by the auth provider."""
    options = {"require": ["sub", "exp"]}
    if settings.JWT_AUDIENCE:
        return jwt.decode(
            tok, settings.JWT_SECRET, algorithms=[settings.JWT_ALG], audience=settings.JWT_AUDIENCE, options=options
        )
    return jwt.decode(
        tok, settings.JWT_SECRET, algorithms=[settings.JWT_ALG], options={**options, "verify_aud": False}
    )
