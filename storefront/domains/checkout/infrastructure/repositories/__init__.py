"""
Checkout Repository Implementations

SQLAlchemy implementations of the checkout ports.
"""

from .basket_repository import SQLAlchemyBasketRepository
from .coupon_repository import SQLAlchemyCouponRepository
from .order_repository import SQLAlchemyOrderRepository
from .product_repository import SQLAlchemyProductRepository
from .shipping_rate_repository import SQLAlchemyShippingRateRepository

__all__ = [
    "SQLAlchemyBasketRepository",
    "SQLAlchemyCouponRepository",
    "SQLAlchemyOrderRepository",
    "SQLAlchemyProductRepository",
    "SQLAlchemyShippingRateRepository",
]
