"""Admin endpoints for composing a page from components."""

import uuid

from fastapi import APIRouter, Depends

from pagebuilder.core.dependencies import get_component_store, get_data_store
from pagebuilder.core.exceptions import NotFoundError, ProblemDetailError
from pagebuilder.schemas.common import ErrorResponse
from pagebuilder.schemas.page_component import (
    ComponentTypeResponse,
    ConfigFormResponse,
    PageComponentConfigUpdate,
    PageComponentCreate,
    PageComponentRead,
    ReorderRequest,
)
from pagebuilder.services.component_store import ComponentStore, to_component
from pagebuilder.services.config_defaults import (
    COMPONENT_TYPES,
    defaults_for,
    form_fields,
    merge_config,
    variant_preset,
    variant_presets,
)
from pagebuilder.services.data_store import DataStore

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/component-types", response_model=list[ComponentTypeResponse])
async def list_component_types() -> list[ComponentTypeResponse]:
    """The component palette with each type's default fields and variants."""
    return [
        ComponentTypeResponse(type=t, defaults=defaults_for(t), variants=variant_presets(t))
        for t in COMPONENT_TYPES
    ]


@router.get(
    "/pages/{page_id}/components",
    response_model=list[PageComponentRead],
    responses=_NOT_FOUND,
)
async def list_page_components(
    page_id: uuid.UUID,
    store: ComponentStore = Depends(get_component_store),
) -> list[PageComponentRead]:
    return await store.list_for_page(page_id)


@router.post(
    "/pages/{page_id}/components",
    response_model=PageComponentRead,
    status_code=201,
    responses={409: {"model": ErrorResponse}},
)
async def add_page_component(
    page_id: uuid.UUID,
    body: PageComponentCreate,
    store: ComponentStore = Depends(get_component_store),
) -> PageComponentRead:
    """Append a component; variant presets sit under the caller's overrides."""
    overrides = merge_config(variant_preset(body.type, body.variant), body.overrides)
    return await store.add(page_id, body.type, body.variant, overrides)


@router.post(
    "/pages/{page_id}/components/reorder",
    response_model=list[PageComponentRead],
    responses=_NOT_FOUND,
)
async def reorder_page_components(
    page_id: uuid.UUID,
    body: ReorderRequest,
    store: ComponentStore = Depends(get_component_store),
) -> list[PageComponentRead]:
    components = await store.list_for_page(page_id)
    if body.from_index >= len(components) or body.to_index >= len(components):
        raise ProblemDetailError(
            status=422,
            title="Invalid Reorder",
            detail=f"Indices must be below {len(components)}",
        )
    return await store.move(body.from_index, body.to_index)


@router.get(
    "/components/{component_id}/form",
    response_model=ConfigFormResponse,
    responses=_NOT_FOUND,
)
async def get_component_form(
    component_id: uuid.UUID,
    data: DataStore = Depends(get_data_store),
) -> ConfigFormResponse:
    """Fields an edit form should render for this component."""
    rows = await data.select("page_components", {"id": component_id}, limit=1)
    if not rows:
        raise NotFoundError(f"Component {component_id} not found")
    fields, unrecognized = form_fields(rows[0]["type"], rows[0]["config"] or {})
    return ConfigFormResponse(fields=fields, unrecognized=unrecognized)


@router.patch(
    "/components/{component_id}/config",
    response_model=PageComponentRead,
    responses=_NOT_FOUND,
)
async def update_component_config(
    component_id: uuid.UUID,
    body: PageComponentConfigUpdate,
    store: ComponentStore = Depends(get_component_store),
) -> PageComponentRead:
    await store.update_config(component_id, body.config)
    rows = await store.data.select("page_components", {"id": component_id}, limit=1)
    return to_component(rows[0])


@router.delete("/components/{component_id}", status_code=204, responses=_NOT_FOUND)
async def delete_component(
    component_id: uuid.UUID,
    store: ComponentStore = Depends(get_component_store),
) -> None:
    await store.remove(component_id)
