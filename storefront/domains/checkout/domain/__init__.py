"""
Checkout Domain Layer

Entities, value objects and pure services for baskets, pricing and orders.
"""

from .entities import Basket, BasketItem, BuyerInfo, Order, OrderItem, OrderPricing, PaymentSummary, Product, ShippingAddress
from .services import BasketTotals, PricingService, compute_final_price, compute_totals, finalize_order
from .value_objects import (
    Coupon,
    CouponKind,
    NoDiscount,
    OrderStatus,
    PercentageDiscount,
    ProductDiscount,
    PromotionalPrice,
    ShippingPolicy,
    product_discount_from_fields,
)

__all__ = [
    "Basket",
    "BasketItem",
    "BasketTotals",
    "BuyerInfo",
    "Coupon",
    "CouponKind",
    "NoDiscount",
    "Order",
    "OrderItem",
    "OrderPricing",
    "OrderStatus",
    "PaymentSummary",
    "PercentageDiscount",
    "PricingService",
    "Product",
    "ProductDiscount",
    "PromotionalPrice",
    "ShippingAddress",
    "ShippingPolicy",
    "compute_final_price",
    "compute_totals",
    "finalize_order",
    "product_discount_from_fields",
]
