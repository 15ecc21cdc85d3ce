"""
Unit tests for order snapshots and the Order aggregate.
"""

from decimal import Decimal

import pytest

from storefront.core.domain import BusinessRuleViolationException, InvalidOperationException
from storefront.domains.checkout.domain.entities import BasketItem, Order, OrderPricing
from storefront.domains.checkout.domain.services import compute_totals, finalize_order
from storefront.domains.checkout.domain.value_objects import (
    Coupon,
    CouponKind,
    OrderStatus,
    PercentageDiscount,
    PromotionalPrice,
    ShippingPolicy,
)


@pytest.fixture
def items() -> list[BasketItem]:
    return [
        BasketItem(
            product_id=1,
            name="Linen Shirt",
            unit_price=5000,
            quantity=2,
            picture_url="shirt.jpg",
            variant_id=10,
            variant_color="white",
            discount=PercentageDiscount(percentage=Decimal("10")),
        ),
        BasketItem(product_id=2, name="Cap", unit_price=1500, quantity=1, discount=PromotionalPrice(price=1200)),
    ]


@pytest.fixture
def order(items, buyer_info) -> Order:
    return finalize_order(compute_totals(items), items, buyer_info)


class TestFinalizeOrder:
    """Tests for finalize_order."""

    def test_total_matches_basket_total(self, items, buyer_info):
        coupon = Coupon(kind=CouponKind.PERCENT_OFF, name="TEN", percent_off=Decimal("10"))
        totals = compute_totals(items, coupon)

        order = finalize_order(totals, items, buyer_info, coupon_code=coupon.name)

        assert order.get_total() == totals.total
        assert order.subtotal == totals.subtotal
        assert order.product_discount == totals.product_discount
        assert order.discount == totals.discount
        assert order.delivery_fee == totals.delivery_fee
        assert order.pricing.coupon_discount == totals.coupon_discount
        assert order.coupon_code == "TEN"

    @pytest.mark.parametrize(
        ("coupon", "policy"),
        [
            (None, ShippingPolicy()),
            (Coupon(kind=CouponKind.AMOUNT_OFF, name="BIG", amount_off=50000), ShippingPolicy()),
            (None, ShippingPolicy(rate=900, free_shipping_threshold=0)),
            (Coupon(kind=CouponKind.PERCENT_OFF, name="P", percent_off=Decimal("33")), ShippingPolicy(rate=1)),
        ],
    )
    def test_total_matches_for_various_baskets(self, items, buyer_info, coupon, policy):
        totals = compute_totals(items, coupon, policy)

        order = finalize_order(totals, items, buyer_info)

        assert order.get_total() == totals.total

    def test_copies_line_items(self, order):
        shirt, cap = order.order_items

        assert shirt.product_id == 1
        assert shirt.name == "Linen Shirt"
        assert shirt.picture_url == "shirt.jpg"
        assert shirt.variant_id == 10
        assert shirt.variant_color == "white"
        assert shirt.price == 4500
        assert shirt.original_price == 5000
        assert shirt.quantity == 2
        assert cap.price == 1200
        assert cap.line_total == 1200

    def test_snapshot_is_independent_of_basket(self, items, buyer_info):
        order = finalize_order(compute_totals(items), items, buyer_info)

        items[0].unit_price = 9999
        items[0].quantity = 7

        assert order.order_items[0].original_price == 5000
        assert order.order_items[0].quantity == 2

    def test_rejects_empty_basket(self, buyer_info):
        with pytest.raises(BusinessRuleViolationException):
            finalize_order(compute_totals([]), [], buyer_info)

    def test_starts_pending(self, order):
        assert order.status == OrderStatus.PENDING
        assert order.buyer_email == "ana@example.com"
        assert order.payment_intent_id == "pi_123"
        assert order.item_count == 3


class TestOrderLifecycle:
    """Tests for Order status changes."""

    def test_pricing_cannot_be_replaced(self, order):
        with pytest.raises(InvalidOperationException):
            order.pricing = OrderPricing(subtotal=1, product_discount=0, discount=0, delivery_fee=0)

    def test_items_cannot_be_replaced(self, order):
        with pytest.raises(InvalidOperationException):
            order.order_items = ()

    def test_status_change_keeps_pricing(self, order):
        total = order.get_total()

        order.transition_to(OrderStatus.PAYMENT_RECEIVED)
        order.transition_to(OrderStatus.PROCESSING)

        assert order.status == OrderStatus.PROCESSING
        assert order.get_total() == total
        assert order.version == 2

    def test_invalid_transition(self, order):
        with pytest.raises(InvalidOperationException) as exc_info:
            order.transition_to(OrderStatus.DELIVERED)

        assert exc_info.value.current_state == "Pending"

    def test_cancel_sets_timestamp(self, order):
        order.cancel()

        assert order.status == OrderStatus.CANCELLED
        assert order.cancelled_at is not None

    def test_tracking_requires_shipped(self, order):
        with pytest.raises(InvalidOperationException):
            order.set_tracking("TRK-1")

    def test_tracking_on_shipped_order(self, order):
        for status in (
            OrderStatus.PAYMENT_RECEIVED,
            OrderStatus.PROCESSING,
            OrderStatus.PROCESSED,
            OrderStatus.SHIPPED,
        ):
            order.transition_to(status)

        order.set_tracking("TRK-1")

        assert order.tracking_number == "TRK-1"
        assert order.tracking_added_at is not None

    def test_belongs_to_ignores_case(self, order):
        assert order.belongs_to("ANA@example.com")
        assert not order.belongs_to("other@example.com")


class TestOrderPricing:
    """Tests for the OrderPricing snapshot."""

    def test_total_floors_at_zero(self):
        pricing = OrderPricing(subtotal=1000, product_discount=0, discount=5000, delivery_fee=500)

        assert pricing.total == 0

    def test_rejects_negative_amounts(self):
        with pytest.raises(ValueError):
            OrderPricing(subtotal=-1, product_discount=0, discount=0, delivery_fee=0)

    def test_product_discount_is_part_of_discount(self):
        with pytest.raises(ValueError):
            OrderPricing(subtotal=1000, product_discount=200, discount=100, delivery_fee=0)
