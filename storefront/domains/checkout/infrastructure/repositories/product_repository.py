"""
Product Repository Implementation

SQLAlchemy implementation of IProductRepository.
"""

import logging
from decimal import Decimal
from typing import cast

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domains.checkout.application.ports import IProductRepository
from storefront.domains.checkout.domain.entities import Product
from storefront.models.db.catalog import Product as ProductModel

logger = logging.getLogger(__name__)


def product_to_entity(model: ProductModel) -> Product:
    """Convert a product row to the checkout's catalog view."""
    return Product(
        id=cast(int, model.id),
        name=cast(str, model.name),
        price=cast(int, model.price),
        picture_url=cast(str | None, model.picture_url) or "",
        discount_percentage=cast(Decimal | None, model.discount_percentage),
        promotional_price=cast(int | None, model.promotional_price),
        quantity_in_stock=cast(int, model.quantity_in_stock) or 0,
    )


class SQLAlchemyProductRepository(IProductRepository):
    """
    SQLAlchemy implementation of product repository.

    Only active products are visible to the checkout.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get_by_id(self, product_id: int) -> Product | None:
        """Get product by ID."""
        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id == product_id, ProductModel.active.is_(True))
        )
        model = result.scalar_one_or_none()
        return product_to_entity(model) if model else None

    async def get_many(self, product_ids: list[int], for_update: bool = False) -> list[Product]:
        """Get several active products, optionally locking their rows."""
        if not product_ids:
            return []

        query = (
            select(ProductModel)
            .where(ProductModel.id.in_(product_ids), ProductModel.active.is_(True))
            .order_by(ProductModel.id)
        )
        if for_update:
            query = query.with_for_update()

        result = await self.session.execute(query)
        return [product_to_entity(m) for m in result.scalars().all()]

    async def update_stock(self, product: Product) -> None:
        """Persist the product's quantity in stock."""
        await self.session.execute(
            update(ProductModel)
            .where(ProductModel.id == product.id)
            .values(quantity_in_stock=product.quantity_in_stock)
        )
        logger.debug(f"Product {product.id} stock set to {product.quantity_in_stock}")
