"""
Basket models
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Column, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product


class Basket(Base, TimestampMixin):
    """Cestas de compra. El cupón aplicado se copia en la propia cesta."""

    __tablename__ = "baskets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    basket_id = Column(String(100), nullable=False, unique=True, index=True)
    payment_intent_id = Column(String(200))
    version = Column(Integer, nullable=False, default=0)

    # Applied coupon
    coupon_name = Column(String(100))
    coupon_promotion_code = Column(String(100))
    coupon_external_id = Column(String(100))
    coupon_amount_off = Column(Integer)
    coupon_percent_off = Column(Numeric(5, 2))

    items: Mapped[List["BasketItem"]] = relationship(
        "BasketItem",
        back_populates="basket",
        cascade="all, delete-orphan",
        order_by="BasketItem.id",
    )

    def __repr__(self):
        return f"<Basket(basket_id='{self.basket_id}', items={len(self.items)})>"


class BasketItem(Base, TimestampMixin):
    """Líneas de una cesta."""

    __tablename__ = "basket_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    basket_fk = Column(Integer, ForeignKey("baskets.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    variant_id = Column(Integer)
    variant_color = Column(String(50))

    basket: Mapped["Basket"] = relationship("Basket", back_populates="items")
    product: Mapped["Product"] = relationship("Product")

    __table_args__ = (
        UniqueConstraint("basket_fk", "product_id", "variant_id", name="uq_basket_items_line"),
        Index("idx_basket_items_basket", basket_fk),
    )

    def __repr__(self):
        return f"<BasketItem(product_id={self.product_id}, quantity={self.quantity})>"
