"""
Order Snapshot

Turns the current basket state into a standalone order record. After this
point the order's pricing is independent of the basket, the catalog and the
shipping table.
"""

import logging
from collections.abc import Iterable

from storefront.core.domain import BusinessRuleViolationException

from ..entities.basket import BasketItem
from ..entities.order import BuyerInfo, Order, OrderItem, OrderPricing
from .pricing_service import BasketTotals

logger = logging.getLogger(__name__)


def snapshot_item(item: BasketItem) -> OrderItem:
    """Copy a basket line into an order line, charging its final price."""
    return OrderItem(
        product_id=item.product_id,
        name=item.name,
        price=item.final_price,
        original_price=item.unit_price,
        quantity=item.quantity,
        picture_url=item.picture_url,
        variant_id=item.variant_id,
        variant_color=item.variant_color,
    )


def finalize_order(
    basket_totals: BasketTotals,
    line_items: Iterable[BasketItem],
    buyer_info: BuyerInfo,
    coupon_code: str | None = None,
) -> Order:
    """
    Build an order from basket totals and line items.

    Args:
        basket_totals: Totals computed for the same basket state
        line_items: Basket line items to copy
        buyer_info: Buyer email, addresses and payment details
        coupon_code: Name of the applied coupon, kept for reference

    Returns:
        New, unsaved Order whose get_total() equals basket_totals.total

    Raises:
        BusinessRuleViolationException: If there are no line items
    """
    order_items = tuple(snapshot_item(item) for item in line_items)
    if not order_items:
        raise BusinessRuleViolationException(
            rule="order_requires_items",
            message="Cannot create an order from an empty basket",
        )

    pricing = OrderPricing(
        subtotal=basket_totals.subtotal,
        product_discount=basket_totals.product_discount,
        discount=basket_totals.discount,
        delivery_fee=basket_totals.delivery_fee,
    )

    order = Order(
        buyer=buyer_info,
        order_items=order_items,
        pricing=pricing,
        coupon_code=coupon_code,
    )
    logger.debug(f"Finalized order for {buyer_info.buyer_email}: {len(order_items)} lines, total {order.get_total()}")
    return order
