"""Page component request/response schemas."""

import uuid
from typing import Any, Literal

from pydantic import BaseModel, Field

ComponentType = Literal["navigation", "hero", "product_grid", "contact_form", "cart", "footer"]


class PageComponentRead(BaseModel):
    id: uuid.UUID
    page_id: uuid.UUID
    type: str
    config: dict[str, Any] = Field(default_factory=dict)
    position: int = Field(0, ge=0)
    is_active: bool = True

    model_config = {"from_attributes": True}


class PageComponentCreate(BaseModel):
    type: ComponentType
    variant: str = Field("default", min_length=1, max_length=64)
    overrides: dict[str, Any] = Field(default_factory=dict)


class PageComponentConfigUpdate(BaseModel):
    config: dict[str, Any]


class ReorderRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class ComponentTypeResponse(BaseModel):
    type: str
    defaults: dict[str, Any]
    variants: dict[str, dict[str, Any]]


class ConfigFormResponse(BaseModel):
    """Config split into fields the edit form knows how to render and the rest."""

    fields: dict[str, Any]
    unrecognized: list[str]
