"""Drag-and-drop reordering of page components.

``reorder`` is pure: it splices the dragged component into its new slot and
renumbers every component to its index, so positions come out as 0..N-1
whatever gaps existed before. ``persist_positions`` writes the result back
one row at a time, in ascending index order, with no transaction around the
batch: a failure partway leaves earlier rows written, and the caller is
expected to reload from the store rather than undo them.
"""

import logging
from collections.abc import Sequence

from pagebuilder.schemas.page_component import PageComponentRead
from pagebuilder.services.data_store import DataStore

logger = logging.getLogger(__name__)


def renumber(components: Sequence[PageComponentRead]) -> list[PageComponentRead]:
    """Copy of ``components`` with ``position`` set to each element's index."""
    return [
        c if c.position == index else c.model_copy(update={"position": index})
        for index, c in enumerate(components)
    ]


def reorder(
    components: Sequence[PageComponentRead], from_index: int, to_index: int
) -> list[PageComponentRead]:
    """Move the element at ``from_index`` to ``to_index`` and renumber."""
    size = len(components)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise IndexError(f"reorder indices ({from_index}, {to_index}) out of range for {size}")

    items = list(components)
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return renumber(items)


def changed_positions(
    before: Sequence[PageComponentRead], after: Sequence[PageComponentRead]
) -> list[PageComponentRead]:
    """Components of ``after`` whose position differs from ``before``, in index order."""
    previous = {c.id: c.position for c in before}
    return [c for c in after if previous.get(c.id) != c.position]


async def persist_positions(store: DataStore, components: Sequence[PageComponentRead]) -> int:
    """Write each component's position, sequentially. Returns rows written.

    Raises the first store error unchanged; nothing written before it is undone.
    """
    written = 0
    for component in components:
        await store.update("page_components", component.id, {"position": component.position})
        written += 1
    logger.debug("Persisted %d component positions", written)
    return written
