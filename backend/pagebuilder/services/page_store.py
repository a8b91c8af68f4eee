"""Pages: list, create (with slug derivation), delete, and visitor lookup."""

import logging
import re
import uuid
from collections.abc import Sequence
from typing import Any

from pagebuilder.core.exceptions import NotFoundError
from pagebuilder.schemas.page import PageRead
from pagebuilder.services.data_store import DataStore

logger = logging.getLogger(__name__)

TABLE = "pages"

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lower-case the title and collapse every non-alphanumeric run into one hyphen.

    Leading and trailing hyphens are kept: "Sale!" becomes "sale-".
    """
    return _NON_ALNUM_RUN.sub("-", title.lower())


def fallback_selection(pages: Sequence[PageRead], deleted_id: uuid.UUID) -> PageRead | None:
    """Page to select after ``deleted_id`` is removed: another home page, else any page."""
    remaining = [p for p in pages if p.id != deleted_id]
    for page in remaining:
        if page.is_home:
            return page
    return remaining[0] if remaining else None


def default_selection(pages: Sequence[PageRead]) -> PageRead | None:
    """Initial selection: the first home page, else the first page."""
    for page in pages:
        if page.is_home:
            return page
    return pages[0] if pages else None


class PageStore:
    def __init__(self, data: DataStore):
        self.data = data

    async def list_pages(self) -> list[PageRead]:
        """All pages, oldest first."""
        rows = await self.data.select(TABLE, order_by="created_at")
        return [PageRead.model_validate(r) for r in rows]

    async def get(self, page_id: uuid.UUID) -> PageRead:
        return self._one(await self.data.select(TABLE, {"id": page_id}, limit=1), page_id)

    async def get_by_slug(self, slug: str) -> PageRead:
        return self._one(await self.data.select(TABLE, {"slug": slug}, limit=1), slug)

    async def get_home(self) -> PageRead:
        rows = await self.data.select(TABLE, {"is_home": True}, order_by="created_at", limit=1)
        return self._one(rows, "home")

    async def create(self, title: str | None) -> PageRead | None:
        """Create a non-home page. An empty title is not an error: nothing happens."""
        if not title or not title.strip():
            logger.debug("Page creation skipped: empty title")
            return None

        record: dict[str, Any] = {"title": title, "slug": slugify(title), "is_home": False}
        row = await self.data.insert(TABLE, record)
        page = PageRead.model_validate(row)
        logger.info("Created page %s (%s)", page.id, page.slug)
        return page

    async def delete(self, page_id: uuid.UUID) -> None:
        await self.data.delete(TABLE, page_id)
        logger.info("Deleted page %s", page_id)

    @staticmethod
    def _one(rows: list[dict], ref: object) -> PageRead:
        if not rows:
            raise NotFoundError(f"Page {ref} not found")
        return PageRead.model_validate(rows[0])
