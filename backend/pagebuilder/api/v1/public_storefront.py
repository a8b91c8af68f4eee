"""Public storefront endpoints (anonymous).

Pages are resolved by slug, or the home page when none is given; only
active components are returned, in render order, with configs merged onto
the current type defaults. Checkout is the only write: it records a
pending order.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.core.dependencies import (
    get_component_store,
    get_data_store,
    get_db,
    get_page_store,
)
from pagebuilder.core.exceptions import NotFoundError
from pagebuilder.models.product import Product
from pagebuilder.schemas.common import ErrorResponse
from pagebuilder.schemas.order import OrderCreate, OrderRead
from pagebuilder.schemas.page import PageRead, PublicPageResponse
from pagebuilder.schemas.product import BrandResponse, PublicProductResponse
from pagebuilder.services.component_store import ComponentStore
from pagebuilder.services.data_store import DataStore
from pagebuilder.services.orders import place_order
from pagebuilder.services.page_store import PageStore

router = APIRouter()


def _public_product(product: Product) -> PublicProductResponse:
    return PublicProductResponse(
        id=product.id,
        title=product.title,
        description=product.description,
        price=product.price,
        category=product.category,
        theme_color=product.theme_color,
        images=product.images or [],
        colors=product.colors or [],
        sizes=product.sizes or [],
        in_stock=product.stock > 0,
    )


async def _public_page(page: PageRead, components: ComponentStore) -> PublicPageResponse:
    return PublicPageResponse(
        page=page,
        components=await components.list_for_page(page.id, active_only=True),
    )


@router.get("/pages/home", response_model=PublicPageResponse)
async def get_home_page(
    pages: PageStore = Depends(get_page_store),
    components: ComponentStore = Depends(get_component_store),
) -> PublicPageResponse:
    return await _public_page(await pages.get_home(), components)


@router.get("/pages/{slug}", response_model=PublicPageResponse)
async def get_page_by_slug(
    slug: str,
    pages: PageStore = Depends(get_page_store),
    components: ComponentStore = Depends(get_component_store),
) -> PublicPageResponse:
    return await _public_page(await pages.get_by_slug(slug), components)


@router.get("/brand", response_model=BrandResponse)
async def get_brand(
    pages: PageStore = Depends(get_page_store),
    components: ComponentStore = Depends(get_component_store),
) -> BrandResponse:
    """Logo text of the first navigation block on the home page, if any."""
    try:
        home = await pages.get_home()
    except NotFoundError:
        return BrandResponse()

    for component in await components.list_for_page(home.id):
        if component.type == "navigation":
            return BrandResponse(brand_name=component.config.get("logoText"))
    return BrandResponse()


@router.get("/products", response_model=list[PublicProductResponse])
async def list_public_products(
    category: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> list[PublicProductResponse]:
    stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
    if category is not None:
        stmt = stmt.where(Product.category == category)
    result = await db.execute(stmt)
    return [_public_product(p) for p in result.scalars().all()]


@router.get("/products/{product_id}", response_model=PublicProductResponse)
async def get_public_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> PublicProductResponse:
    product = await db.get(Product, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _public_product(product)


@router.post(
    "/orders",
    response_model=OrderRead,
    status_code=201,
    responses={409: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def create_order(
    body: OrderCreate,
    data: DataStore = Depends(get_data_store),
) -> OrderRead:
    """Record a pending order from the visitor's cart lines and checkout form."""
    return await place_order(data, body)
