"""Shared seeding helpers for store and API tests."""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pagebuilder.services.data_store import DataStore


async def seed_page(
    data: DataStore, title: str = "Home", *, is_home: bool = False, slug: str | None = None
) -> dict:
    """Insert a page row directly and return it."""
    return await data.insert(
        "pages",
        {
            "title": title,
            "slug": slug or f"{title.lower()}-{uuid.uuid4().hex[:6]}",
            "is_home": is_home,
        },
    )


async def seed_components(
    data: DataStore,
    page_id: uuid.UUID,
    positions: list[int],
    component_type: str = "hero",
    config: dict | None = None,
) -> list[dict]:
    """Insert one component per position, in the given order."""
    return [
        await data.insert(
            "page_components",
            {"page_id": page_id, "type": component_type, "config": config or {}, "position": p},
        )
        for p in positions
    ]


@asynccontextmanager
async def committed_store(engine: AsyncEngine) -> AsyncGenerator[DataStore, None]:
    """DataStore on its own session, committed on exit (for seeding API tests)."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield DataStore(session)
        await session.commit()
