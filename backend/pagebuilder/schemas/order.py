"""Checkout order schemas."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pagebuilder.schemas.cart import CartLine


class CustomerInfo(BaseModel):
    """Checkout form fields, accepted under the storefront client's keys too."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., min_length=1, max_length=255, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=255, alias="lastName")
    email: str = Field(..., max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=255)
    postal_code: str = Field(..., min_length=1, max_length=32, alias="postalCode")
    country: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Must be an email address")
        return v


class OrderCreate(BaseModel):
    customer_info: CustomerInfo
    items: list[CartLine] = Field(..., min_length=1)

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.items), Decimal("0"))


class OrderRead(BaseModel):
    id: uuid.UUID
    customer_info: dict[str, Any]
    items: list[dict[str, Any]]
    total: Decimal
    status: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
