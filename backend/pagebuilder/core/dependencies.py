"""FastAPI dependency chain: session → DataStore → page/component stores."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.db.session import async_session_factory
from pagebuilder.services.component_store import ComponentStore
from pagebuilder.services.data_store import DataStore
from pagebuilder.services.page_store import PageStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session. Commits on success, rolls back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_data_store(db: AsyncSession = Depends(get_db)) -> DataStore:
    return DataStore(db)


def get_page_store(data: DataStore = Depends(get_data_store)) -> PageStore:
    return PageStore(data)


def get_component_store(data: DataStore = Depends(get_data_store)) -> ComponentStore:
    return ComponentStore(data)
