"""Response envelopes shared by several routers."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")


class PaginatedResponse(BaseModel, Generic[ItemT]):
    """One page of a newest-first listing; pass ``next_cursor`` back for more."""

    items: list[ItemT]
    next_cursor: str | None = None
    has_more: bool = False


class ErrorResponse(BaseModel):
    """RFC 7807 body written by the handlers in ``pagebuilder.core.exceptions``."""

    type: str = "about:blank"
    title: str
    status: int = Field(..., ge=400, le=599)
    # A message, or the list of field errors for a 422
    detail: str | list[dict[str, Any]] | dict[str, Any]
    instance: str
