"""Cart line schema, serialized under the keys the storefront client uses."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CartLine(BaseModel):
    """Product snapshot plus the shopper's choices.

    Extra product fields (description, images, ...) are kept as-is so the
    snapshot survives a round trip through storage.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, validate_assignment=True)

    id: str
    title: str | None = None
    price: Decimal = Decimal("0")
    quantity: int = Field(1, ge=1)
    selected_color: str | None = Field(None, alias="selectedColor")
    selected_size: str | None = Field(None, alias="selectedSize")
    added_at: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(), alias="addedAt"
    )

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: object) -> str:
        # UUIDs and ints both come back as strings after a storage round trip
        return str(v)

    @property
    def key(self) -> tuple[str, str | None, str | None]:
        return (self.id, self.selected_color, self.selected_size)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity
