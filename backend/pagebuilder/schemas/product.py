"""Product request/response schemas."""

import re
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def split_csv(value: str | list[str] | None) -> list[str]:
    """Split a comma-separated form input, trimming and dropping empty entries."""
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else value
    return [p.strip() for p in parts if p and p.strip()]


class _ProductFields(BaseModel):
    @field_validator("theme_color", check_fields=False)
    @classmethod
    def validate_hex_color(cls, v: str | None) -> str | None:
        if v is not None and not _HEX_COLOR_RE.match(v):
            raise ValueError("Must be a hex color in #RRGGBB format")
        return v

    @field_validator("images", "colors", "sizes", mode="before", check_fields=False)
    @classmethod
    def normalize_list(cls, v: str | list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return split_csv(v)


class ProductCreate(_ProductFields):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    category: str | None = None
    stock: int = Field(0, ge=0)
    theme_color: str = "#000000"
    images: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)


class ProductUpdate(_ProductFields):
    """PATCH body: every field optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    category: str | None = None
    stock: int | None = Field(None, ge=0)
    theme_color: str | None = None
    images: list[str] | None = None
    colors: list[str] | None = None
    sizes: list[str] | None = None


class ProductResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    price: Decimal
    category: str | None = None
    stock: int
    theme_color: str
    images: list[str]
    colors: list[str]
    sizes: list[str]
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PublicProductResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    price: Decimal
    category: str | None = None
    theme_color: str
    images: list[str]
    colors: list[str]
    sizes: list[str]
    in_stock: bool

    model_config = {"from_attributes": True}


class BrandResponse(BaseModel):
    brand_name: str | None = None
