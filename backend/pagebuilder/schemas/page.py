"""Page request/response schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from pagebuilder.schemas.page_component import PageComponentRead


class PageCreate(BaseModel):
    # Empty title is accepted here and turned into a no-op by the store
    title: str = Field("", max_length=255)


class PageRead(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    is_home: bool = False
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class PublicPageResponse(BaseModel):
    """A visitor-facing page with its active components in render order."""

    page: PageRead
    components: list[PageComponentRead]
