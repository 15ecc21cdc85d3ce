"""
Order Repository Implementation

SQLAlchemy implementation of IOrderRepository.
"""

import logging
from datetime import datetime
from typing import Any, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.core.domain import EntityNotFoundException
from storefront.domains.checkout.application.ports import IOrderRepository
from storefront.domains.checkout.domain.entities import (
    BuyerInfo,
    Order,
    OrderItem,
    OrderPricing,
    PaymentSummary,
    ShippingAddress,
)
from storefront.domains.checkout.domain.value_objects import OrderStatus
from storefront.models.db.orders import Order as OrderModel
from storefront.models.db.orders import OrderItem as OrderItemModel

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(IOrderRepository):
    """
    SQLAlchemy implementation of order repository.

    Pricing columns are written once on create and never updated.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, order: Order) -> Order:
        """Create a new order."""
        model = self._to_model(order)
        self.session.add(model)
        await self.session.flush()
        order.id = cast(int, model.id)
        return order

    async def get_by_id(self, order_id: int) -> Order | None:
        """Get order by ID."""
        result = await self.session.execute(
            select(OrderModel).options(selectinload(OrderModel.items)).where(OrderModel.id == order_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_payment_intent(self, payment_intent_id: str) -> Order | None:
        """Get the order created for a payment intent."""
        result = await self.session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.payment_intent_id == payment_intent_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_buyer(self, buyer_email: str) -> list[Order]:
        """Get orders by buyer email, newest first."""
        result = await self.session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(func.lower(OrderModel.buyer_email) == buyer_email.lower())
            .order_by(OrderModel.order_date.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def update(self, order: Order) -> Order:
        """Persist status and tracking metadata."""
        result = await self.session.execute(select(OrderModel).where(OrderModel.id == order.id))
        model = result.scalar_one_or_none()
        if model is None:
            raise EntityNotFoundException("Order", order.id)

        setattr(model, "status", order.status.value)
        setattr(model, "tracking_number", order.tracking_number)
        setattr(model, "tracking_added_at", order.tracking_added_at)
        setattr(model, "cancelled_at", order.cancelled_at)
        setattr(model, "version", order.version)
        await self.session.flush()
        return order

    # Mapping methods

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert model to entity."""
        items = tuple(
            OrderItem(
                product_id=cast(int, item.product_id),
                name=cast(str, item.name),
                price=cast(int, item.price),
                original_price=cast(int, item.original_price),
                quantity=cast(int, item.quantity),
                picture_url=cast(str | None, item.picture_url) or "",
                variant_id=cast(int | None, item.variant_id),
                variant_color=cast(str | None, item.variant_color),
            )
            for item in model.items or []
        )

        address = cast(dict[str, Any], model.shipping_address) or {}
        payment = cast(dict[str, Any], model.payment_summary) or {}
        buyer = BuyerInfo(
            buyer_email=cast(str, model.buyer_email),
            shipping_address=ShippingAddress(
                name=address.get("name", ""),
                line1=address.get("line1", ""),
                line2=address.get("line2"),
                city=address.get("city", ""),
                state=address.get("state", ""),
                postal_code=address.get("postal_code", ""),
                country=address.get("country", ""),
            ),
            payment_summary=PaymentSummary(
                last4=int(payment.get("last4", 0)),
                brand=payment.get("brand", ""),
                exp_month=int(payment.get("exp_month", 0)),
                exp_year=int(payment.get("exp_year", 0)),
            ),
            payment_intent_id=cast(str, model.payment_intent_id),
        )

        status_str = cast(str | None, model.status) or OrderStatus.PENDING.value
        try:
            status = OrderStatus.from_string(status_str)
        except ValueError:
            logger.warning(f"Order {model.id} has unknown status {status_str!r}, reading as Pending")
            status = OrderStatus.PENDING

        order = Order(
            id=cast(int, model.id),
            buyer=buyer,
            order_items=items,
            pricing=OrderPricing(
                subtotal=cast(int, model.subtotal),
                product_discount=cast(int, model.product_discount) or 0,
                discount=cast(int, model.discount) or 0,
                delivery_fee=cast(int, model.delivery_fee) or 0,
            ),
            coupon_code=cast(str | None, model.coupon_code),
            status=status,
            order_date=cast(datetime, model.order_date),
            tracking_number=cast(str | None, model.tracking_number),
            tracking_added_at=cast(datetime | None, model.tracking_added_at),
            cancelled_at=cast(datetime | None, model.cancelled_at),
            version=cast(int | None, model.version) or 0,
        )

        created_at = cast(datetime | None, model.created_at)
        updated_at = cast(datetime | None, model.updated_at)
        if created_at is not None:
            order.created_at = created_at
        if updated_at is not None:
            order.updated_at = updated_at

        return order

    def _to_model(self, order: Order) -> OrderModel:
        """Convert entity to model."""
        address = order.buyer.shipping_address
        payment = order.buyer.payment_summary

        return OrderModel(
            buyer_email=order.buyer_email,
            payment_intent_id=order.payment_intent_id,
            order_date=order.order_date,
            status=order.status.value,
            version=order.version,
            subtotal=order.subtotal,
            product_discount=order.product_discount,
            discount=order.discount,
            delivery_fee=order.delivery_fee,
            coupon_code=order.coupon_code,
            shipping_address={
                "name": address.name,
                "line1": address.line1,
                "line2": address.line2,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "country": address.country,
            },
            payment_summary={
                "last4": payment.last4,
                "brand": payment.brand,
                "exp_month": payment.exp_month,
                "exp_year": payment.exp_year,
            },
            tracking_number=order.tracking_number,
            items=[
                OrderItemModel(
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    variant_color=item.variant_color,
                    name=item.name,
                    picture_url=item.picture_url,
                    price=item.price,
                    original_price=item.original_price,
                    quantity=item.quantity,
                )
                for item in order.order_items
            ],
        )
