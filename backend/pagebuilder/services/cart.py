"""Client-local shopping cart.

The whole cart is written to storage after every mutation and read back once
at construction. Storage problems never reach the shopper: an unreadable
value starts an empty cart and a failed save is only logged.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from pagebuilder.core.config import settings
from pagebuilder.schemas.cart import CartLine
from pagebuilder.schemas.order import CustomerInfo, OrderCreate

logger = logging.getLogger(__name__)

LineKey = tuple[str, str | None, str | None]

T = TypeVar("T")


class CartStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, items: Mapping[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class FileStorage:
    """Key/value pairs kept in a single JSON object on disk."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.CART_STORAGE_PATH)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            data = {}
        data[key] = value
        self.path.write_text(json.dumps(data), encoding="utf-8")


def line_key(product_id: Any, color: str | None, size: str | None) -> LineKey:
    return (str(product_id), color, size)


class Cart:
    def __init__(self, storage: CartStorage | None = None, key: str | None = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self.key = key or settings.CART_STORAGE_KEY
        self.is_open = False
        self.lines: list[CartLine] = self._load()

    # -- persistence ------------------------------------------------------

    def _load(self) -> list[CartLine]:
        try:
            raw = self.storage.get_item(self.key)
            if not raw:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("stored cart is not a list")
            return [CartLine.model_validate(item) for item in data]
        except (OSError, ValueError, ValidationError):
            # json.JSONDecodeError is a ValueError
            logger.warning("Failed to load cart from storage; starting empty", exc_info=True)
            return []

    def _save(self) -> None:
        payload = json.dumps(
            [line.model_dump(mode="json", by_alias=True) for line in self.lines]
        )
        try:
            self.storage.set_item(self.key, payload)
        except OSError:
            logger.exception("Failed to save cart to storage")

    # -- visibility -------------------------------------------------------

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    # -- mutations --------------------------------------------------------

    def add_to_cart(
        self,
        product: Mapping[str, Any],
        quantity: int = 1,
        color: str | None = None,
        size: str | None = None,
    ) -> CartLine:
        """Add a product; same (id, color, size) bumps the existing line. Opens the cart.

        Raises ValueError for a quantity below 1; use ``update_quantity`` or
        ``remove_from_cart`` to shrink a line.
        """
        if quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {quantity}")
        key = line_key(product["id"], color, size)
        line = self._find(key)
        if line is not None:
            line.quantity += quantity
        else:
            line = CartLine.model_validate(
                {**product, "quantity": quantity, "selectedColor": color, "selectedSize": size}
            )
            self.lines.append(line)
        self._save()
        self.open()
        return line

    def remove_from_cart(self, key: LineKey) -> None:
        self.lines = [line for line in self.lines if line.key != key]
        self._save()

    def update_quantity(self, key: LineKey, quantity: int) -> None:
        """Set a line's quantity; anything below 1 removes the line."""
        if quantity < 1:
            self.remove_from_cart(key)
            return
        line = self._find(key)
        if line is not None:
            line.quantity = quantity
            self._save()

    def clear_cart(self) -> None:
        self.lines = []
        self._save()

    def _find(self, key: LineKey) -> CartLine | None:
        for line in self.lines:
            if line.key == key:
                return line
        return None

    # -- derived ----------------------------------------------------------

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    # -- checkout ---------------------------------------------------------

    def order_payload(self, customer: CustomerInfo | Mapping[str, Any]) -> OrderCreate:
        if not self.lines:
            raise ValueError("cannot check out an empty cart")
        return OrderCreate.model_validate(
            {"customer_info": customer, "items": [line.model_copy() for line in self.lines]}
        )

    async def checkout(
        self,
        customer: CustomerInfo | Mapping[str, Any],
        place: Callable[[OrderCreate], Awaitable[T]],
    ) -> T:
        """Submit the cart through ``place``; the cart is cleared only once it succeeds.

        Any error from ``place`` propagates with the cart left untouched.
        """
        order = self.order_payload(customer)
        placed = await place(order)
        logger.info("Checked out %d cart lines", len(order.items))
        self.clear_cart()
        self.close()
        return placed
