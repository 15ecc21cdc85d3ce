"""
Catalog models used by checkout
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Index, Integer, Numeric, String, Text

from .base import Base, TimestampMixin


class Product(Base, TimestampMixin):
    """Productos del catálogo. Precios en céntimos."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    price = Column(Integer, nullable=False)
    picture_url = Column(String(500), nullable=False, default="")
    type = Column(String(100))
    brand = Column(String(100))
    quantity_in_stock = Column(Integer, nullable=False, default=0)

    # Discount sources; a promotional price wins over the percentage
    discount_percentage = Column(Numeric(5, 2))
    promotional_price = Column(Integer)

    active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("quantity_in_stock >= 0", name="ck_products_stock_non_negative"),
        Index("idx_products_active", active),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
