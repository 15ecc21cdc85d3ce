"""
Shipping Policy Value Object

Flat delivery fee waived once the pre-discount subtotal is strictly
greater than the free-shipping threshold.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain import Money, ValueObject, to_decimal

DEFAULT_DELIVERY_FEE = 500
DEFAULT_FREE_SHIPPING_THRESHOLD = 10000


def _euros_to_cents(amount: Decimal | float | None, default: int) -> int:
    if amount is None:
        return default
    # Negative stored values behave like zero in delivery_fee_for
    return Money.from_euros(max(Decimal(0), to_decimal(amount))).cents


@dataclass(frozen=True)
class ShippingPolicy(ValueObject):
    """
    Delivery fee rule, in cents.

    A non-positive threshold means shipping is always free.
    """

    rate: int = DEFAULT_DELIVERY_FEE
    free_shipping_threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD

    def delivery_fee_for(self, subtotal: int) -> int:
        """
        Delivery fee for a pre-discount subtotal.

        Args:
            subtotal: Basket subtotal before any discount, in cents

        Returns:
            Fee in cents, never negative
        """
        if self.free_shipping_threshold <= 0:
            return 0
        if subtotal > self.free_shipping_threshold:
            return 0
        return max(0, self.rate)

    @classmethod
    def from_euros(
        cls,
        rate: Decimal | float | None,
        free_shipping_threshold: Decimal | float | None,
        default_rate: int = DEFAULT_DELIVERY_FEE,
        default_threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD,
    ) -> "ShippingPolicy":
        """Build a policy from a shipping-rate row stored in euros; missing values use the defaults."""
        return cls(
            rate=_euros_to_cents(rate, default_rate),
            free_shipping_threshold=_euros_to_cents(free_shipping_threshold, default_threshold),
        )
