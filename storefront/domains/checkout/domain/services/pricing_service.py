"""
Pricing Service for Checkout Domain

Pure pricing arithmetic for the storefront: the per-unit discount engine and
the basket aggregator. All amounts are integer cents; nothing here touches
storage or global state.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain import PaymentException

from ..entities.basket import Basket, BasketItem
from ..value_objects.coupon import Coupon
from ..value_objects.discount import product_discount_from_fields
from ..value_objects.shipping import ShippingPolicy


def compute_final_price(
    unit_price: int,
    discount_percentage: int | float | str | Decimal | None = None,
    promotional_price: int | None = None,
) -> int:
    """
    Effective unit price after the product-level discount.

    Args:
        unit_price: List price in cents
        discount_percentage: Optional percentage off, clamped into [0, 100]
        promotional_price: Optional fixed price in cents, wins over the percentage

    Returns:
        Final unit price in cents, never negative

    Example:
        ```python
        compute_final_price(5000, discount_percentage=10)  # 4500
        compute_final_price(5000, promotional_price=3999)  # 3999
        ```
    """
    return product_discount_from_fields(discount_percentage, promotional_price).final_price(unit_price)


@dataclass(frozen=True)
class BasketTotals:
    """Derived monetary summary of a basket, in cents."""

    subtotal: int = 0
    product_discount: int = 0
    coupon_discount: int = 0
    delivery_fee: int = 0

    @property
    def discount(self) -> int:
        return self.product_discount + self.coupon_discount

    @property
    def total(self) -> int:
        return max(0, self.subtotal - self.discount + self.delivery_fee)

    def to_dict(self) -> dict[str, int]:
        return {
            "subtotal": self.subtotal,
            "product_discount": self.product_discount,
            "coupon_discount": self.coupon_discount,
            "discount": self.discount,
            "delivery_fee": self.delivery_fee,
            "total": self.total,
        }


def compute_totals(
    items: Iterable[BasketItem],
    coupon: Coupon | None = None,
    shipping_policy: ShippingPolicy | None = None,
) -> BasketTotals:
    """
    Aggregate a basket into its totals.

    The free-shipping threshold and percent-off coupons both look at the
    pre-discount subtotal. The delivery fee applies to an empty basket too.

    Args:
        items: Basket line items
        coupon: Optional basket-level coupon
        shipping_policy: Delivery fee rule, defaults to 500 / 10000 cents

    Returns:
        BasketTotals for the given state
    """
    policy = shipping_policy or ShippingPolicy()
    items = list(items)

    subtotal = sum(item.unit_price * item.quantity for item in items)
    product_discount = sum(item.quantity * max(0, item.unit_price - item.final_price) for item in items)
    delivery_fee = policy.delivery_fee_for(subtotal)
    coupon_discount = coupon.discount_for(subtotal) if coupon else 0

    return BasketTotals(
        subtotal=subtotal,
        product_discount=product_discount,
        coupon_discount=coupon_discount,
        delivery_fee=delivery_fee,
    )


class PricingService:
    """
    Domain service binding the pricing functions to a shipping policy and the
    payment provider's per-charge limit.

    Example:
        ```python
        service = PricingService(ShippingPolicy(rate=500, free_shipping_threshold=10000))
        totals = service.totals_for(basket)
        service.ensure_chargeable(totals.total)
        ```
    """

    def __init__(
        self,
        shipping_policy: ShippingPolicy | None = None,
        max_charge_amount: int | None = None,
    ):
        """
        Initialize pricing service.

        Args:
            shipping_policy: Delivery fee rule
            max_charge_amount: Largest total in cents the payment provider accepts
        """
        self.shipping_policy = shipping_policy or ShippingPolicy()
        self.max_charge_amount = max_charge_amount

    def totals_for(self, basket: Basket) -> BasketTotals:
        """Compute totals for the current basket state."""
        return compute_totals(basket.items, basket.coupon, self.shipping_policy)

    def ensure_chargeable(self, total: int, payment_id: str | None = None) -> None:
        """
        Check that a total can be charged in a single payment.

        Raises:
            PaymentException: If the total exceeds the provider limit
        """
        if self.max_charge_amount is not None and total > self.max_charge_amount:
            raise PaymentException(
                f"Order total {total} exceeds the maximum chargeable amount {self.max_charge_amount}",
                payment_id=payment_id,
                reason="amount_too_large",
            )
