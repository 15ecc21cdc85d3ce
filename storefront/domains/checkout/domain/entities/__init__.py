"""
Checkout Domain Entities
"""

from .basket import Basket, BasketItem
from .order import BuyerInfo, Order, OrderItem, OrderPricing, PaymentSummary, ShippingAddress
from .product import Product

__all__ = [
    "Basket",
    "BasketItem",
    "BuyerInfo",
    "Order",
    "OrderItem",
    "OrderPricing",
    "PaymentSummary",
    "Product",
    "ShippingAddress",
]
