"""State owned by one admin editing session.

Holds the page list, the current selection and the loaded components, and
exposes the editing operations the dashboard needs. Views subscribe to change
notifications instead of owning state. Store failures never escape from
here: reads degrade to empty results and writes append a user-visible notice.
"""

import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from pagebuilder.core.exceptions import NotFoundError, PageBuilderError
from pagebuilder.schemas.page import PageRead
from pagebuilder.schemas.page_component import PageComponentRead
from pagebuilder.services.component_store import ComponentStore
from pagebuilder.services.config_defaults import DEFAULT_VARIANT
from pagebuilder.services.data_store import DataStore
from pagebuilder.services.page_store import PageStore, default_selection, fallback_selection

logger = logging.getLogger(__name__)

T = TypeVar("T")

SessionListener = Callable[["AdminSession"], None]


class AdminSession:
    def __init__(self, data: DataStore):
        self.page_store = PageStore(data)
        self.component_store = ComponentStore(data)
        self.pages: list[PageRead] = []
        self.current_page: PageRead | None = None
        self.loading = False
        self.notices: list[str] = []
        self._pending: set[tuple[str, Any]] = set()
        self._listeners: list[SessionListener] = []
        self.component_store.subscribe(lambda _components: self._notify())

    @property
    def components(self) -> list[PageComponentRead]:
        return self.component_store.components

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _notice(self, message: str) -> None:
        self.notices.append(message)
        self._notify()

    async def _guarded(
        self, op: str, target: Any, action: Callable[[], Awaitable[T]], failure: str
    ) -> T | None:
        """Run a mutation unless the same one is already in flight for ``target``.

        Store errors are logged and turned into a notice; the result is None.
        """
        token = (op, target)
        if token in self._pending:
            logger.info("Skipping %s on %s: already in flight", op, target)
            return None
        self._pending.add(token)
        try:
            return await action()
        except PageBuilderError as exc:
            logger.warning("%s: %s", failure, exc.message)
            self._notice(f"{failure}: {exc.message}")
            return None
        finally:
            self._pending.discard(token)

    # -- pages ------------------------------------------------------------

    async def load(self) -> None:
        """Load the page list and select the home page (else the first page)."""
        self.loading = True
        self._notify()
        try:
            self.pages = await self.page_store.list_pages()
        except PageBuilderError:
            logger.exception("Error loading pages")
            self.pages = []
        finally:
            self.loading = False
        await self.select_page(default_selection(self.pages))

    async def select_page(self, page: PageRead | None) -> None:
        self.current_page = page
        if page is None:
            self.component_store.clear()
            return
        try:
            await self.component_store.list_for_page(page.id)
        except NotFoundError:
            logger.warning("Selected page %s no longer exists", page.id)
            self.component_store.clear(page.id)

    async def create_page(self, title: str | None) -> PageRead | None:
        async def action() -> PageRead | None:
            page = await self.page_store.create(title)
            if page is not None:
                self.pages = [*self.pages, page]
                await self.select_page(page)
            return page

        return await self._guarded("create_page", title, action, "Failed to create page")

    async def delete_page(self, page_id: uuid.UUID) -> bool:
        """Delete a page (the caller has already confirmed). True on success."""

        async def action() -> bool:
            await self.page_store.delete(page_id)
            previous = self.pages
            self.pages = [p for p in previous if p.id != page_id]
            if self.current_page is not None and self.current_page.id == page_id:
                await self.select_page(fallback_selection(previous, page_id))
            else:
                self._notify()
            return True

        return bool(await self._guarded("delete_page", page_id, action, "Failed to delete page"))

    # -- components -------------------------------------------------------

    async def add_component(
        self,
        component_type: str,
        variant: str = DEFAULT_VARIANT,
        overrides: Mapping[str, Any] | None = None,
    ) -> PageComponentRead | None:
        if self.current_page is None:
            return None
        page_id = self.current_page.id
        return await self._guarded(
            "add_component",
            (page_id, component_type, variant),
            lambda: self.component_store.add(page_id, component_type, variant, overrides),
            "Failed to add component",
        )

    async def remove_component(self, component_id: uuid.UUID) -> bool:
        async def action() -> bool:
            await self.component_store.remove(component_id)
            return True

        return bool(
            await self._guarded(
                "remove_component", component_id, action, "Failed to remove component"
            )
        )

    async def update_component_config(
        self, component_id: uuid.UUID, config: Mapping[str, Any]
    ) -> PageComponentRead | None:
        return await self._guarded(
            "update_config",
            component_id,
            lambda: self.component_store.update_config(component_id, config),
            "Failed to save component",
        )

    async def move_component(
        self, from_index: int, to_index: int
    ) -> list[PageComponentRead] | None:
        size = len(self.components)
        if not (0 <= from_index < size and 0 <= to_index < size):
            # Stale drag from a view that has not caught up with a reload
            logger.warning(
                "Reorder %d -> %d out of range for %d components", from_index, to_index, size
            )
            self._notice(
                f"Failed to reorder components: no component at {from_index} or {to_index}"
            )
            return None
        return await self._guarded(
            "move_component",
            self.component_store.page_id,
            lambda: self.component_store.move(from_index, to_index),
            "Failed to reorder components",
        )
