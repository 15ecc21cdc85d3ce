"""
Checkout Domain Value Objects

Immutable value objects for baskets, coupons, shipping and orders.
"""

from storefront.domains.checkout.domain.value_objects.coupon import Coupon, CouponKind
from storefront.domains.checkout.domain.value_objects.discount import (
    NoDiscount,
    PercentageDiscount,
    ProductDiscount,
    PromotionalPrice,
    product_discount_from_fields,
)
from storefront.domains.checkout.domain.value_objects.order_status import OrderStatus
from storefront.domains.checkout.domain.value_objects.shipping import (
    DEFAULT_DELIVERY_FEE,
    DEFAULT_FREE_SHIPPING_THRESHOLD,
    ShippingPolicy,
)

__all__ = [
    "Coupon",
    "CouponKind",
    "NoDiscount",
    "PercentageDiscount",
    "PromotionalPrice",
    "ProductDiscount",
    "product_discount_from_fields",
    "OrderStatus",
    "ShippingPolicy",
    "DEFAULT_DELIVERY_FEE",
    "DEFAULT_FREE_SHIPPING_THRESHOLD",
]
