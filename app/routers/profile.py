from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.models.models import Profile
from app.schemas.common import Envelope, ok
from app.schemas.profile import ProfileIn, ProfileOut, UserPreferences

router = APIRouter(prefix="/settings", tags=["settings"])


def _profile_out(user_id: str, profile: Profile | None) -> ProfileOut:
    if profile is None:
        return ProfileOut(user_id=user_id, preferences=UserPreferences())
    return ProfileOut(
        user_id=profile.user_id,
        name=profile.name,
        region=profile.region,
        avatar_url=profile.avatar_url,
        preferences=UserPreferences.model_validate(profile.preferences or {}),
        updated_at=profile.updated_at.isoformat() if profile.updated_at else None,
    )


@router.get("/profile", response_model=Envelope[ProfileOut])
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    profile = await session.get(Profile, user_id)
    return ok(_profile_out(user_id, profile))


@router.put("/profile", response_model=Envelope[ProfileOut])
async def put_profile(
    payload: ProfileIn,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    profile = await session.get(Profile, user_id)
    if profile is None:
        profile = Profile(user_id=user_id)
        session.add(profile)
    data = payload.model_dump(exclude_unset=True)
    for key, value in data.items():
        setattr(profile, key, value)
    await session.commit()
    await session.refresh(profile)
    return ok(_profile_out(user_id, profile), message="Profile updated")
