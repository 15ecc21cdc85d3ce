"""
Product Discount Value Objects

A product carries at most one discount source. Each source is its own type so
the precedence between a promotional price and a percentage is decided once,
when the variant is built, instead of at every call site.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain import Percentage, ValueObject, to_decimal


@dataclass(frozen=True)
class NoDiscount(ValueObject):
    """Product sold at its list price."""

    def final_price(self, unit_price: int) -> int:
        return max(0, unit_price)


@dataclass(frozen=True)
class PercentageDiscount(ValueObject):
    """
    Percentage off the list price.

    Out-of-range percentages are clamped into [0, 100] so pricing stays total.
    """

    percentage: Decimal

    def _validate(self) -> None:
        object.__setattr__(self, "percentage", Percentage.clamped(self.percentage).value)

    def final_price(self, unit_price: int) -> int:
        return max(0, Percentage(self.percentage).remaining_of(unit_price))


@dataclass(frozen=True)
class PromotionalPrice(ValueObject):
    """Fixed promotional unit price in cents, replacing the list price."""

    price: int

    def _validate(self) -> None:
        if self.price < 0:
            object.__setattr__(self, "price", 0)

    def final_price(self, unit_price: int) -> int:
        return self.price


ProductDiscount = NoDiscount | PercentageDiscount | PromotionalPrice


def product_discount_from_fields(
    discount_percentage: int | float | str | Decimal | None = None,
    promotional_price: int | None = None,
) -> ProductDiscount:
    """
    Build the discount variant from nullable storage columns.

    A promotional price, when present, takes precedence over a percentage.
    """
    if promotional_price is not None:
        return PromotionalPrice(price=promotional_price)
    if discount_percentage is not None:
        return PercentageDiscount(percentage=to_decimal(discount_percentage))
    return NoDiscount()
