"""Order capture at checkout. Payment is handled outside this service."""

import logging

from pagebuilder.schemas.order import OrderCreate, OrderRead
from pagebuilder.services.data_store import DataStore

logger = logging.getLogger(__name__)

TABLE = "orders"


async def place_order(data: DataStore, order: OrderCreate) -> OrderRead:
    """Record a pending order for the submitted cart lines.

    The total is recomputed from the lines, never taken from the caller.
    """
    row = await data.insert(
        TABLE,
        {
            "customer_info": order.customer_info.model_dump(by_alias=True),
            "items": [line.model_dump(mode="json", by_alias=True) for line in order.items],
            "total": order.total,
            "status": "pending",
        },
    )
    placed = OrderRead.model_validate(row)
    logger.info(
        "Placed order %s: %d lines, total %s", placed.id, len(order.items), placed.total
    )
    return placed
