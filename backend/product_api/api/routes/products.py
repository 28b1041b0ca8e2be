"""Product Routes — public reads, admin-only writes.

Invariants:
    - Every write runs authenticate → require admin → validate before its handler
    - Reads by id validate the identifier before any lookup
    - Handlers call exactly one ProductService operation

Design Decisions:
    - Pipelines are declared next to the routes that use them, once, at import time
    - Bodies are read from the validated RequestContext, then typed through pydantic
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.api import rule_sets
from product_api.api.pipeline import (
    Authenticate, RequestPipeline, RequireRole, ValidateFields,
)
from product_api.core.domain_types import ProductId, Role
from product_api.core.request_context import RequestContext
from product_api.infrastructure.database import get_db
from product_api.schemas.product import (
    DeletedEnvelope, ProductCreate, ProductEnvelope, ProductListEnvelope,
    ProductOut, ProductReplace,
)
from product_api.services.product_service import ProductService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/products", tags=["products"])

PRODUCT_DELETED = "Product deleted"

read_product = RequestPipeline(ValidateFields(rule_sets.PRODUCT_ID))
create_product_pipeline = RequestPipeline(
    Authenticate(), RequireRole(Role.ADMIN),
    ValidateFields(rule_sets.PRODUCT_CREATE),
)
replace_product_pipeline = RequestPipeline(
    Authenticate(), RequireRole(Role.ADMIN),
    ValidateFields(rule_sets.PRODUCT_REPLACE),
)
admin_product_by_id = RequestPipeline(
    Authenticate(), RequireRole(Role.ADMIN),
    ValidateFields(rule_sets.PRODUCT_ID),
)


def get_product_service(
    request: Request, db: AsyncSession = Depends(get_db),
) -> ProductService:
    return ProductService(db, order=request.app.state.settings.product_list_order)


def _envelope(product) -> ProductEnvelope:
    return ProductEnvelope(data=ProductOut.model_validate(product))


@router.get("", response_model=ProductListEnvelope)
async def list_products(
    available: bool | None = Query(None),
    service: ProductService = Depends(get_product_service),
):
    """List products, optionally filtered by availability."""
    products = await service.list_all(available)
    return ProductListEnvelope(
        data=[ProductOut.model_validate(p) for p in products],
    )


@router.get("/{id}", response_model=ProductEnvelope)
async def get_product(
    ctx: RequestContext = Depends(read_product),
    service: ProductService = Depends(get_product_service),
):
    product = await service.get(ProductId(ctx.int_param("id")))
    return _envelope(product)


@router.post(
    "", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    ctx: RequestContext = Depends(create_product_pipeline),
    service: ProductService = Depends(get_product_service),
):
    product = await service.create(ProductCreate.model_validate(ctx.body))
    return _envelope(product)


@router.put("/{id}", response_model=ProductEnvelope)
async def replace_product(
    ctx: RequestContext = Depends(replace_product_pipeline),
    service: ProductService = Depends(get_product_service),
):
    """Overwrite name, price and availability."""
    product = await service.replace(
        ProductId(ctx.int_param("id")), ProductReplace.model_validate(ctx.body),
    )
    return _envelope(product)


@router.patch("/{id}", response_model=ProductEnvelope)
async def toggle_availability(
    ctx: RequestContext = Depends(admin_product_by_id),
    service: ProductService = Depends(get_product_service),
):
    """Flip availability. Any request body is ignored."""
    product = await service.toggle_availability(ProductId(ctx.int_param("id")))
    return _envelope(product)


@router.delete("/{id}", response_model=DeletedEnvelope)
async def delete_product(
    ctx: RequestContext = Depends(admin_product_by_id),
    service: ProductService = Depends(get_product_service),
):
    await service.delete(ProductId(ctx.int_param("id")))
    return DeletedEnvelope(data=PRODUCT_DELETED)
