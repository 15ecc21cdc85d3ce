"""
Unit tests for the checkout pricing service.

Covers the per-unit discount engine and the basket aggregator.
"""

from decimal import Decimal

import pytest

from storefront.core.domain import PaymentException
from storefront.domains.checkout.domain.entities import Basket, BasketItem
from storefront.domains.checkout.domain.services import (
    BasketTotals,
    PricingService,
    compute_final_price,
    compute_totals,
)
from storefront.domains.checkout.domain.value_objects import (
    Coupon,
    CouponKind,
    NoDiscount,
    PercentageDiscount,
    PromotionalPrice,
    ShippingPolicy,
)


def make_item(unit_price: int, quantity: int = 1, discount=None, product_id: int = 1) -> BasketItem:
    return BasketItem(
        product_id=product_id,
        name=f"Product {product_id}",
        unit_price=unit_price,
        quantity=quantity,
        discount=discount or NoDiscount(),
    )


class TestComputeFinalPrice:
    """Tests for compute_final_price."""

    def test_no_discount_returns_unit_price(self):
        assert compute_final_price(5000) == 5000

    def test_percentage_discount(self):
        assert compute_final_price(5000, discount_percentage=10) == 4500

    def test_promotional_price_returned_verbatim(self):
        assert compute_final_price(5000, promotional_price=3999) == 3999

    def test_promotional_price_wins_over_percentage(self):
        assert compute_final_price(5000, discount_percentage=50, promotional_price=4999) == 4999

    def test_promotional_price_above_list_price_is_kept(self):
        assert compute_final_price(1000, promotional_price=1500) == 1500

    def test_negative_promotional_price_clamps_to_zero(self):
        assert compute_final_price(1000, promotional_price=-10) == 0

    def test_rounds_half_up(self):
        # 999 * 0.85 = 849.15 -> 849; 999 * 0.5 = 499.5 -> 500
        assert compute_final_price(999, discount_percentage=15) == 849
        assert compute_final_price(999, discount_percentage=50) == 500

    def test_percentage_above_hundred_clamps_to_free(self):
        assert compute_final_price(5000, discount_percentage=150) == 0

    def test_negative_percentage_clamps_to_list_price(self):
        assert compute_final_price(5000, discount_percentage=-20) == 5000

    def test_fractional_percentage(self):
        assert compute_final_price(10000, discount_percentage=Decimal("12.5")) == 8750

    @pytest.mark.parametrize("price", [0, 1, 99, 1001, 5000, 123457])
    @pytest.mark.parametrize("percentage", [0, 1, 10, 33, 50, 99, 100])
    def test_discounted_price_never_exceeds_list_price(self, price, percentage):
        final = compute_final_price(price, discount_percentage=percentage)
        assert 0 <= final <= price


class TestComputeTotals:
    """Tests for compute_totals."""

    def test_empty_basket_still_pays_delivery(self):
        totals = compute_totals([])

        assert totals == BasketTotals(delivery_fee=500)
        assert totals.subtotal == 0
        assert totals.total == 500

    def test_no_discounts_total_is_subtotal_plus_fee(self):
        totals = compute_totals([make_item(2500, 2), make_item(1000, 1, product_id=2)])

        assert totals.subtotal == 6000
        assert totals.discount == 0
        assert totals.delivery_fee == 500
        assert totals.total == totals.subtotal + totals.delivery_fee

    @pytest.mark.parametrize(
        ("subtotal", "expected_fee"),
        [(9999, 500), (10000, 500), (10001, 0)],
    )
    def test_free_shipping_threshold_is_strict(self, subtotal, expected_fee):
        totals = compute_totals([make_item(subtotal)])

        assert totals.delivery_fee == expected_fee

    def test_threshold_uses_pre_discount_subtotal(self):
        # 10100 list price, 5000 after discount: still ships free
        totals = compute_totals([make_item(10100, discount=PromotionalPrice(price=5000))])

        assert totals.subtotal == 10100
        assert totals.product_discount == 5100
        assert totals.delivery_fee == 0

    def test_percentage_discount_scenario(self):
        totals = compute_totals([make_item(5000, 2, PercentageDiscount(percentage=Decimal("10")))])

        assert totals.subtotal == 10000
        assert totals.product_discount == 1000
        assert totals.coupon_discount == 0
        assert totals.delivery_fee == 500
        assert totals.total == 9500

    def test_percent_off_coupon_scenario(self):
        coupon = Coupon(kind=CouponKind.PERCENT_OFF, name="TEN", percent_off=Decimal("10"))

        totals = compute_totals([make_item(5000, 2, PercentageDiscount(percentage=Decimal("10")))], coupon)

        assert totals.coupon_discount == 1000
        assert totals.discount == 2000
        assert totals.delivery_fee == 500
        assert totals.total == 8500

    def test_amount_off_coupon_is_flat(self):
        coupon = Coupon(kind=CouponKind.AMOUNT_OFF, name="FIVE", amount_off=500)

        totals = compute_totals([make_item(1000, 3)], coupon)

        assert totals.coupon_discount == 500
        assert totals.total == 3000 - 500 + 500

    def test_total_never_negative(self):
        coupon = Coupon(kind=CouponKind.AMOUNT_OFF, name="HUGE", amount_off=100000)

        totals = compute_totals([make_item(1000)], coupon)

        assert totals.total == 0

    def test_promotional_price_above_list_adds_no_discount(self):
        totals = compute_totals([make_item(1000, 2, PromotionalPrice(price=1500))])

        assert totals.product_discount == 0

    def test_apply_then_remove_coupon_restores_totals(self):
        items = [make_item(4000, 1), make_item(2000, 2, PercentageDiscount(percentage=25), product_id=2)]
        coupon = Coupon(kind=CouponKind.PERCENT_OFF, name="TWENTY", percent_off=Decimal("20"))

        before = compute_totals(items)
        with_coupon = compute_totals(items, coupon)
        after = compute_totals(items, None)

        assert with_coupon.total < before.total
        assert after == before

    def test_non_positive_threshold_means_free_shipping(self):
        policy = ShippingPolicy(rate=700, free_shipping_threshold=0)

        totals = compute_totals([make_item(100)], shipping_policy=policy)

        assert totals.delivery_fee == 0

    def test_negative_rate_clamps_to_zero(self):
        policy = ShippingPolicy(rate=-100, free_shipping_threshold=10000)

        totals = compute_totals([make_item(100)], shipping_policy=policy)

        assert totals.delivery_fee == 0

    def test_is_idempotent(self):
        items = [make_item(3333, 3, PercentageDiscount(percentage=Decimal("33.3")))]

        assert compute_totals(items) == compute_totals(items)

    def test_to_dict(self):
        totals = BasketTotals(subtotal=10000, product_discount=1000, coupon_discount=1000, delivery_fee=500)

        assert totals.to_dict() == {
            "subtotal": 10000,
            "product_discount": 1000,
            "coupon_discount": 1000,
            "discount": 2000,
            "delivery_fee": 500,
            "total": 8500,
        }


class TestPricingService:
    """Tests for the PricingService wrapper."""

    def test_totals_for_basket_uses_policy(self):
        basket = Basket(basket_id="b-1", items=[make_item(2000)])
        service = PricingService(ShippingPolicy(rate=350, free_shipping_threshold=5000))

        totals = service.totals_for(basket)

        assert totals.delivery_fee == 350
        assert totals.total == 2350

    def test_totals_for_basket_includes_coupon(self):
        basket = Basket(
            basket_id="b-1",
            items=[make_item(2000)],
            coupon=Coupon(kind=CouponKind.AMOUNT_OFF, name="OFF", amount_off=300),
        )

        totals = PricingService().totals_for(basket)

        assert totals.coupon_discount == 300

    def test_ensure_chargeable_accepts_limit(self):
        PricingService(max_charge_amount=500000).ensure_chargeable(500000)

    def test_ensure_chargeable_rejects_above_limit(self):
        with pytest.raises(PaymentException) as exc_info:
            PricingService(max_charge_amount=500000).ensure_chargeable(500001, payment_id="pi_1")

        assert exc_info.value.code == "PAYMENT_ERROR"
        assert exc_info.value.details["payment_id"] == "pi_1"

    def test_no_limit_configured(self):
        PricingService().ensure_chargeable(10**9)
