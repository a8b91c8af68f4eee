"""Page components: ordered loading, add/remove, config edits and reordering.

The store keeps a local copy of the components of the page it last loaded.
Config edits and reorders are applied to that copy first and then written to
the backing store; when the write fails the copy is thrown away and reloaded
(rollback by refetch, never by patching individual fields back).
"""

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from pagebuilder.core.exceptions import (
    InsertError,
    NotFoundError,
    PageBuilderError,
    UpstreamUnavailableError,
)
from pagebuilder.schemas.page_component import PageComponentRead
from pagebuilder.services.config_defaults import DEFAULT_VARIANT, build_config, with_defaults
from pagebuilder.services.data_store import DataStore
from pagebuilder.services.reorder import changed_positions, persist_positions, reorder

logger = logging.getLogger(__name__)

TABLE = "page_components"

Listener = Callable[[list[PageComponentRead]], None]


def to_component(record: Mapping[str, Any]) -> PageComponentRead:
    """Build a component from a stored row, merging in current type defaults."""
    return PageComponentRead(
        id=record["id"],
        page_id=record["page_id"],
        type=record["type"],
        config=with_defaults(record["type"], record.get("config")),
        position=record["position"],
        is_active=record.get("is_active", True),
    )


class ComponentStore:
    def __init__(self, data: DataStore):
        self.data = data
        self.page_id: uuid.UUID | None = None
        self.components: list[PageComponentRead] = []
        self._listeners: list[Listener] = []

    # -- change notifications -------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, components: list[PageComponentRead]) -> None:
        self.components = components
        for listener in list(self._listeners):
            listener(list(components))

    def clear(self, page_id: uuid.UUID | None = None) -> None:
        """Drop the local copy, e.g. when no page (or a vanished page) is selected."""
        self.page_id = page_id
        self._set([])

    # -- reads ------------------------------------------------------------

    async def list_for_page(
        self, page_id: uuid.UUID, active_only: bool = False
    ) -> list[PageComponentRead]:
        """Components of a page in ascending position order, configs merged.

        Raises NotFoundError when the page does not exist. Any other store
        failure is logged and yields an empty list.
        """
        pages = await self._select_or_none("pages", {"id": page_id}, limit=1)
        if pages is None:
            return self._loaded(page_id, [])
        if not pages:
            raise NotFoundError(f"Page {page_id} not found")

        filters: dict[str, Any] = {"page_id": page_id}
        if active_only:
            filters["is_active"] = True
        rows = await self._select_or_none(TABLE, filters, order_by="position")
        return self._loaded(page_id, [to_component(r) for r in rows or []])

    async def reload(self) -> list[PageComponentRead]:
        if self.page_id is None:
            return []
        try:
            return await self.list_for_page(self.page_id)
        except NotFoundError:
            logger.warning("Page %s disappeared during reload", self.page_id)
            return self._loaded(self.page_id, [])

    async def _select_or_none(self, table: str, filters: dict, **kwargs) -> list[dict] | None:
        try:
            return await self.data.select(table, filters, **kwargs)
        except UpstreamUnavailableError:
            logger.exception("Error loading %s with %s", table, filters)
            return None

    def _loaded(
        self, page_id: uuid.UUID, components: list[PageComponentRead]
    ) -> list[PageComponentRead]:
        self.page_id = page_id
        self._set(components)
        return list(components)

    # -- writes -----------------------------------------------------------

    async def next_position(self, page_id: uuid.UUID) -> int:
        """1 + the highest stored position on the page, or 0 for an empty page.

        Always asks the store, never the local copy, so that edits made
        elsewhere since the last load are accounted for.
        """
        rows = await self.data.select(
            TABLE, {"page_id": page_id}, order_by="position", descending=True, limit=1
        )
        return rows[0]["position"] + 1 if rows else 0

    async def add(
        self,
        page_id: uuid.UUID,
        component_type: str,
        variant: str = DEFAULT_VARIANT,
        overrides: Mapping[str, Any] | None = None,
    ) -> PageComponentRead:
        """Append a new component to the end of the page."""
        try:
            position = await self.next_position(page_id)
            record = await self.data.insert(
                TABLE,
                {
                    "page_id": page_id,
                    "type": component_type,
                    "config": build_config(component_type, variant, overrides),
                    "position": position,
                },
            )
        except InsertError:
            logger.exception("Error adding %s component to page %s", component_type, page_id)
            raise
        except PageBuilderError as exc:
            logger.exception("Error adding %s component to page %s", component_type, page_id)
            raise InsertError(f"Failed to add component: {exc.message}") from exc

        component = to_component(record)
        logger.info(
            "Added %s component %s to page %s at position %d",
            component_type,
            component.id,
            page_id,
            position,
        )
        if self.page_id == page_id:
            await self.reload()
        return component

    async def remove(self, component_id: uuid.UUID) -> None:
        """Delete a component. Remaining positions are left as they are."""
        await self.data.delete(TABLE, component_id)
        if any(c.id == component_id for c in self.components):
            self._set([c for c in self.components if c.id != component_id])

    async def update_config(
        self, component_id: uuid.UUID, config: Mapping[str, Any]
    ) -> PageComponentRead | None:
        """Replace a component's config: local copy first, then the store.

        Returns the updated local component (None if it was not loaded).
        On a store failure the local copy is reloaded and the error re-raised.
        """
        new_config = dict(config)
        updated = None
        components = []
        for c in self.components:
            if c.id == component_id:
                c = updated = c.model_copy(update={"config": with_defaults(c.type, new_config)})
            components.append(c)
        if updated is not None:
            self._set(components)

        try:
            await self.data.update(TABLE, component_id, {"config": new_config})
        except PageBuilderError:
            logger.exception("Error updating config of component %s; reloading", component_id)
            await self.reload()
            raise
        return updated

    async def move(self, from_index: int, to_index: int) -> list[PageComponentRead]:
        """Drag the component at ``from_index`` to ``to_index`` on the loaded page."""
        if from_index == to_index:
            return list(self.components)

        before = self.components
        after = reorder(before, from_index, to_index)
        self._set(after)

        try:
            await persist_positions(self.data, changed_positions(before, after))
        except PageBuilderError:
            logger.exception(
                "Error persisting component positions; reloading page %s", self.page_id
            )
            await self.reload()
            raise
        return list(after)
