"""
Order management models
"""

from datetime import UTC, datetime
from typing import List

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin


class Order(Base, TimestampMixin):
    """Órdenes de compra. Importes en céntimos, congelados al crear la orden."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    buyer_email = Column(String(255), nullable=False)
    payment_intent_id = Column(String(200), nullable=False, unique=True)
    order_date = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    status = Column(String(30), nullable=False, default="Pending")
    version = Column(Integer, nullable=False, default=0)

    # Pricing snapshot
    subtotal = Column(Integer, nullable=False)
    product_discount = Column(Integer, nullable=False, default=0)
    discount = Column(Integer, nullable=False, default=0)
    delivery_fee = Column(Integer, nullable=False, default=0)
    coupon_code = Column(String(100))

    shipping_address = Column(JSONB, nullable=False)
    payment_summary = Column(JSONB, nullable=False)

    tracking_number = Column(String(100))
    tracking_added_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))

    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        Index("idx_orders_buyer_email", buyer_email),
        Index("idx_orders_status", status),
        Index("idx_orders_date", order_date),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, buyer='{self.buyer_email}', status='{self.status}')>"


class OrderItem(Base, TimestampMixin):
    """Líneas de una orden con los datos del producto en el momento de la compra."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)

    # Product snapshot; no foreign key so catalog changes never reach the order
    product_id = Column(Integer, nullable=False)
    variant_id = Column(Integer)
    variant_color = Column(String(50))
    name = Column(String(200), nullable=False)
    picture_url = Column(String(500), nullable=False, default="")

    price = Column(Integer, nullable=False)
    original_price = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")

    __table_args__ = (Index("idx_order_items_order", order_id),)

    def __repr__(self):
        return f"<OrderItem(product='{self.name}', quantity={self.quantity}, price={self.price})>"
