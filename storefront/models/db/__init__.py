"""
Database models for the storefront
"""

from .base import Base, TimestampMixin
from .baskets import Basket, BasketItem
from .catalog import Product
from .coupons import Coupon
from .orders import Order, OrderItem
from .shipping import ShippingRate

__all__ = [
    "Base",
    "TimestampMixin",
    "Basket",
    "BasketItem",
    "Coupon",
    "Order",
    "OrderItem",
    "Product",
    "ShippingRate",
]
