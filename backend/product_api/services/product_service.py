"""Product Service — the six catalog operations, one persistence round trip each.

Invariants:
    - get/replace/toggle/delete raise NotFound("Product Not Found") for absent ids
    - toggle flips availability exactly once per call
    - delete is permanent; there is no soft-delete
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.domain_types import MAX_ROW_ID, ProductId, ProductOrder
from product_api.core.errors import NotFound
from product_api.models.product import Product
from product_api.schemas.product import ProductCreate, ProductReplace
from product_api.services.persistence import persistence_guard

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product Not Found"

_ORDERINGS = {
    ProductOrder.ID_DESC: (Product.id.desc(),),
    ProductOrder.PRICE_DESC: (Product.price.desc(), Product.id.desc()),
}


class ProductService:
    def __init__(self, db: AsyncSession, order: ProductOrder = ProductOrder.ID_DESC):
        self._db = db
        self._order = order

    async def list_all(self, available: bool | None = None) -> list[Product]:
        query = select(Product).order_by(*_ORDERINGS[self._order])
        if available is not None:
            query = query.where(Product.availability.is_(available))
        async with persistence_guard(self._db, "list_products"):
            result = await self._db.execute(query)
            return list(result.scalars().all())

    async def _get_or_404(self, product_id: ProductId) -> Product:
        if not 1 <= product_id <= MAX_ROW_ID:
            raise NotFound(PRODUCT_NOT_FOUND)
        async with persistence_guard(self._db, "get_product"):
            product = await self._db.get(Product, product_id)
        if product is None:
            raise NotFound(PRODUCT_NOT_FOUND)
        return product

    async def get(self, product_id: ProductId) -> Product:
        return await self._get_or_404(product_id)

    async def create(self, payload: ProductCreate) -> Product:
        product = Product(
            name=payload.name, price=payload.price,
            availability=payload.availability,
        )
        async with persistence_guard(self._db, "create_product"):
            self._db.add(product)
            await self._db.commit()
            await self._db.refresh(product)
        logger.info("Product created", extra={"product_id": product.id})
        return product

    async def replace(self, product_id: ProductId, payload: ProductReplace) -> Product:
        product = await self._get_or_404(product_id)
        product.name = payload.name
        product.price = payload.price
        product.availability = payload.availability
        async with persistence_guard(self._db, "replace_product"):
            await self._db.commit()
            await self._db.refresh(product)
        return product

    async def toggle_availability(self, product_id: ProductId) -> Product:
        product = await self._get_or_404(product_id)
        product.availability = not product.availability
        async with persistence_guard(self._db, "toggle_availability"):
            await self._db.commit()
            await self._db.refresh(product)
        return product

    async def delete(self, product_id: ProductId) -> None:
        product = await self._get_or_404(product_id)
        async with persistence_guard(self._db, "delete_product"):
            await self._db.delete(product)
            await self._db.commit()
        logger.info("Product deleted", extra={"product_id": product_id})
