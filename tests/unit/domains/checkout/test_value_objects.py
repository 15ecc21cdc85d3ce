"""
Unit tests for checkout value objects.
"""

from decimal import Decimal

import pytest

from storefront.core.domain import Money, Percentage
from storefront.domains.checkout.domain.value_objects import (
    Coupon,
    CouponKind,
    NoDiscount,
    OrderStatus,
    PercentageDiscount,
    PromotionalPrice,
    ShippingPolicy,
    product_discount_from_fields,
)


class TestProductDiscount:
    """Tests for the product discount variants."""

    def test_factory_prefers_promotional_price(self):
        discount = product_discount_from_fields(discount_percentage=20, promotional_price=1999)

        assert discount == PromotionalPrice(price=1999)

    def test_factory_builds_percentage(self):
        discount = product_discount_from_fields(discount_percentage="15.5")

        assert isinstance(discount, PercentageDiscount)
        assert discount.percentage == Decimal("15.5")

    def test_factory_without_fields(self):
        assert product_discount_from_fields() == NoDiscount()

    def test_zero_promotional_price_still_counts(self):
        assert product_discount_from_fields(10, 0) == PromotionalPrice(price=0)

    def test_percentage_is_clamped_on_creation(self):
        assert PercentageDiscount(percentage=Decimal("250")).percentage == Decimal("100")
        assert PercentageDiscount(percentage=Decimal("-5")).percentage == Decimal("0")

    def test_negative_promotional_price_is_clamped(self):
        assert PromotionalPrice(price=-1).price == 0


class TestCoupon:
    """Tests for the Coupon value object."""

    def test_amount_off_requires_amount(self):
        with pytest.raises(ValueError):
            Coupon(kind=CouponKind.AMOUNT_OFF, name="BROKEN")

    def test_percent_off_requires_percentage(self):
        with pytest.raises(ValueError):
            Coupon(kind=CouponKind.PERCENT_OFF, name="BROKEN")

    def test_percent_off_discount_rounds_half_up(self):
        coupon = Coupon(kind=CouponKind.PERCENT_OFF, name="P", percent_off=Decimal("15"))

        # 3333 * 0.15 = 499.95
        assert coupon.discount_for(3333) == 500

    def test_percent_off_is_clamped(self):
        coupon = Coupon(kind=CouponKind.PERCENT_OFF, name="P", percent_off=Decimal("120"))

        assert coupon.discount_for(1000) == 1000

    def test_negative_amount_off_gives_no_discount(self):
        coupon = Coupon(kind=CouponKind.AMOUNT_OFF, name="NEG", amount_off=-300)

        assert coupon.discount_for(1000) == 0

    def test_from_fields_amount_wins(self):
        coupon = Coupon.from_fields("MIX", amount_off=500, percent_off=10)

        assert coupon.kind == CouponKind.AMOUNT_OFF
        assert coupon.amount_off == 500

    def test_from_fields_zero_amount_falls_back_to_percent(self):
        coupon = Coupon.from_fields("PCT", amount_off=0, percent_off="12.5", promotion_code="PCT", coupon_id="c_1")

        assert coupon.kind == CouponKind.PERCENT_OFF
        assert coupon.percent_off == Decimal("12.5")
        assert coupon.coupon_id == "c_1"

    def test_from_fields_without_values(self):
        with pytest.raises(ValueError):
            Coupon.from_fields("EMPTY")


class TestShippingPolicy:
    """Tests for ShippingPolicy."""

    def test_defaults(self):
        policy = ShippingPolicy()

        assert policy.rate == 500
        assert policy.free_shipping_threshold == 10000

    def test_from_euros_converts_to_cents(self):
        policy = ShippingPolicy.from_euros(Decimal("4.99"), Decimal("75.00"))

        assert policy == ShippingPolicy(rate=499, free_shipping_threshold=7500)

    def test_from_euros_uses_defaults_for_missing_values(self):
        policy = ShippingPolicy.from_euros(None, None, default_rate=300, default_threshold=6000)

        assert policy == ShippingPolicy(rate=300, free_shipping_threshold=6000)

    def test_from_euros_rounds_half_up(self):
        assert ShippingPolicy.from_euros(Decimal("2.345"), 0).rate == 235


class TestMoney:
    """Tests for Money and Percentage."""

    def test_from_euros(self):
        assert Money.from_euros("12.345").cents == 1235

    def test_rejects_float_cents(self):
        with pytest.raises(ValueError):
            Money(cents=12.5)  # type: ignore[arg-type]

    def test_subtract_floors_at_zero(self):
        assert Money(cents=100).subtract(Money(cents=300)).cents == 0

    def test_str(self):
        assert str(Money(cents=123456)) == "EUR 1,234.56"

    def test_percentage_range(self):
        with pytest.raises(ValueError):
            Percentage(value=Decimal("101"))

    def test_percentage_of(self):
        assert Percentage(value=Decimal("10")).of(10000) == 1000


class TestOrderStatus:
    """Tests for OrderStatus transitions."""

    def test_happy_path(self):
        path = [
            OrderStatus.PENDING,
            OrderStatus.PAYMENT_RECEIVED,
            OrderStatus.PROCESSING,
            OrderStatus.PROCESSED,
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
            OrderStatus.COMPLETED,
        ]
        for current, following in zip(path, path[1:]):
            assert current.can_transition_to(following)

    def test_cannot_skip_payment(self):
        assert not OrderStatus.PENDING.can_transition_to(OrderStatus.SHIPPED)

    def test_shipped_cannot_be_cancelled(self):
        assert not OrderStatus.SHIPPED.can_be_cancelled()

    def test_terminal_states(self):
        assert OrderStatus.CANCELLED.is_terminal()
        assert OrderStatus.COMPLETED.is_terminal()
        assert not OrderStatus.PENDING.is_terminal()

    def test_is_paid(self):
        assert not OrderStatus.PENDING.is_paid()
        assert OrderStatus.PROCESSING.is_paid()

    def test_from_string_is_case_insensitive(self):
        assert OrderStatus.from_string("paymentreceived") == OrderStatus.PAYMENT_RECEIVED

    def test_from_string_unknown(self):
        with pytest.raises(ValueError):
            OrderStatus.from_string("Lost")
