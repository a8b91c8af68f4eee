"""Admin endpoints for pages."""

import uuid

from fastapi import APIRouter, Depends, Response

from pagebuilder.core.dependencies import get_page_store
from pagebuilder.schemas.common import ErrorResponse
from pagebuilder.schemas.page import PageCreate, PageRead
from pagebuilder.services.page_store import PageStore

router = APIRouter()


@router.get("", response_model=list[PageRead])
async def list_pages(pages: PageStore = Depends(get_page_store)) -> list[PageRead]:
    """All pages, oldest first."""
    return await pages.list_pages()


@router.post(
    "",
    response_model=PageRead,
    status_code=201,
    responses={204: {"description": "Empty title, nothing created"}, 409: {"model": ErrorResponse}},
)
async def create_page(body: PageCreate, pages: PageStore = Depends(get_page_store)):
    page = await pages.create(body.title)
    if page is None:
        return Response(status_code=204)
    return page


@router.delete("/{page_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_page(page_id: uuid.UUID, pages: PageStore = Depends(get_page_store)) -> None:
    await pages.delete(page_id)
