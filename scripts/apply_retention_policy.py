from __future__ import annotations

import asyncio

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.core.config import settings
from app.services.retention import apply_retention_policy


async def _run() -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    async with Session() as session:
        result = await apply_retention_policy(session)
    await engine.dispose()
    print(
        f"Deleted recommendations: {result.recommendations_deleted}, "
        f"outfits: {result.outfits_deleted}"
    )


if __name__ == "__main__":
    asyncio.run(_run())
