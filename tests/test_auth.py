import time

import httpx
import jwt
import pytest

from app.auth import deps as auth_deps
from app.core.config import settings
from app.main import app


def _token(**claims):
    payload = {"sub": "user-123", "exp": int(time.time()) + 60, "aud": settings.JWT_AUDIENCE}
    payload.update(claims)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


@pytest.fixture
async def raw_client():
    app.dependency_overrides.pop(auth_deps.get_current_user_id, None)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(raw_client):
    resp = await raw_client.get("/v1/weather", params={"lat": 0, "lon": 0})
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Unauthorized"}


@pytest.mark.asyncio
async def test_expired_token_is_unauthorized(raw_client):
    headers = {"Authorization": f"Bearer {_token(exp=int(time.time()) - 10)}"}
    resp = await raw_client.get("/v1/weather", params={"lat": 0, "lon": 0}, headers=headers)
    assert resp.status_code == 401


def test_get_current_user_id_reads_sub():
    from fastapi.security import HTTPAuthorizationCredentials

    creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials=_token())
    assert auth_deps.get_current_user_id(creds) == "user-123"
