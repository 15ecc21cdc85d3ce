"""
Basket Repository Implementation

SQLAlchemy implementation of IBasketRepository. Line items are priced from
the product rows they point to, so every read sees live catalog prices.
"""

import logging
from decimal import Decimal
from typing import cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.domains.checkout.application.ports import IBasketRepository
from storefront.domains.checkout.domain.entities import Basket, BasketItem
from storefront.domains.checkout.domain.value_objects import Coupon, product_discount_from_fields
from storefront.models.db.baskets import Basket as BasketModel
from storefront.models.db.baskets import BasketItem as BasketItemModel

logger = logging.getLogger(__name__)


class SQLAlchemyBasketRepository(IBasketRepository):
    """
    SQLAlchemy implementation of basket repository.

    Changes are flushed, not committed; the request session owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get(self, basket_id: str) -> Basket | None:
        """Get basket by its public id."""
        model = await self._load(basket_id)
        return self._to_entity(model) if model else None

    async def get_for_update(self, basket_id: str) -> Basket | None:
        """Get basket by its public id with a row lock held until commit."""
        model = await self._load(basket_id, for_update=True)
        return self._to_entity(model) if model else None

    async def save(self, basket: Basket) -> Basket:
        """Create or update a basket with its items and coupon."""
        model = await self._load(basket.basket_id) if basket.id is not None else None
        if model is None:
            model = BasketModel(basket_id=basket.basket_id, items=[])
            self.session.add(model)

        setattr(model, "payment_intent_id", basket.payment_intent_id)
        setattr(model, "version", basket.version)
        self._apply_coupon(model, basket.coupon)
        self._sync_items(model, basket.items)

        await self.session.flush()
        basket.id = cast(int, model.id)
        logger.debug(f"Saved basket {basket.basket_id} with {len(basket.items)} lines")
        return basket

    async def _load(self, basket_id: str, for_update: bool = False) -> BasketModel | None:
        query = (
            select(BasketModel)
            .options(selectinload(BasketModel.items).selectinload(BasketItemModel.product))
            .where(BasketModel.basket_id == basket_id)
        )
        if for_update:
            query = query.with_for_update(of=BasketModel)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    # Mapping methods

    def _sync_items(self, model: BasketModel, items: list[BasketItem]) -> None:
        """Make the item rows match the entity's lines."""
        existing = {(row.product_id, row.variant_id): row for row in model.items}
        wanted = {(item.product_id, item.variant_id): item for item in items}

        for key, row in existing.items():
            if key not in wanted:
                model.items.remove(row)

        for key, item in wanted.items():
            row = existing.get(key)
            if row is None:
                model.items.append(
                    BasketItemModel(
                        product_id=item.product_id,
                        quantity=item.quantity,
                        variant_id=item.variant_id,
                        variant_color=item.variant_color,
                    )
                )
            else:
                setattr(row, "quantity", item.quantity)
                setattr(row, "variant_color", item.variant_color)

    def _apply_coupon(self, model: BasketModel, coupon: Coupon | None) -> None:
        setattr(model, "coupon_name", coupon.name if coupon else None)
        setattr(model, "coupon_promotion_code", coupon.promotion_code if coupon else None)
        setattr(model, "coupon_external_id", coupon.coupon_id if coupon else None)
        setattr(model, "coupon_amount_off", coupon.amount_off if coupon else None)
        setattr(model, "coupon_percent_off", coupon.percent_off if coupon else None)

    def _to_entity(self, model: BasketModel) -> Basket:
        """Convert model to entity."""
        items = []
        for row in model.items or []:
            product = row.product
            items.append(
                BasketItem(
                    product_id=cast(int, row.product_id),
                    name=cast(str, product.name),
                    unit_price=cast(int, product.price),
                    quantity=cast(int, row.quantity),
                    picture_url=cast(str | None, product.picture_url) or "",
                    variant_id=cast(int | None, row.variant_id),
                    variant_color=cast(str | None, row.variant_color),
                    discount=product_discount_from_fields(
                        cast(Decimal | None, product.discount_percentage),
                        cast(int | None, product.promotional_price),
                    ),
                )
            )

        return Basket(
            id=cast(int, model.id),
            basket_id=cast(str, model.basket_id),
            items=items,
            coupon=self._coupon_from_model(model),
            payment_intent_id=cast(str | None, model.payment_intent_id),
            version=cast(int, model.version) or 0,
        )

    def _coupon_from_model(self, model: BasketModel) -> Coupon | None:
        name = cast(str | None, model.coupon_name)
        if name is None:
            return None
        try:
            return Coupon.from_fields(
                name=name,
                amount_off=cast(int | None, model.coupon_amount_off),
                percent_off=cast(Decimal | None, model.coupon_percent_off),
                promotion_code=cast(str | None, model.coupon_promotion_code) or "",
                coupon_id=cast(str | None, model.coupon_external_id) or "",
            )
        except ValueError as e:
            logger.warning(f"Basket {model.basket_id} has an unusable coupon, ignoring it: {e}")
            return None
