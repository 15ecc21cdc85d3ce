"""
Shipping rate models
"""

from sqlalchemy import Column, Integer, Numeric

from .base import Base, TimestampMixin


class ShippingRate(Base, TimestampMixin):
    """Tarifa de envío. Importes en euros."""

    __tablename__ = "shipping_rates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    rate = Column(Numeric(10, 2), nullable=False)
    free_shipping_threshold = Column(Numeric(10, 2), nullable=False)

    def __repr__(self):
        return f"<ShippingRate(rate={self.rate}, free_shipping_threshold={self.free_shipping_threshold})>"
