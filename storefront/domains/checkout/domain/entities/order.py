"""
Order Aggregate

Immutable record of a completed checkout. Line items and pricing are frozen
when the order is created; later status changes never touch them.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from storefront.core.domain import AggregateRoot, InvalidOperationException, ValueObject

from ..value_objects.order_status import OrderStatus

logger = logging.getLogger(__name__)

_FROZEN_FIELDS = frozenset({"order_items", "pricing"})


@dataclass(frozen=True)
class ShippingAddress(ValueObject):
    """Delivery address captured at checkout."""

    name: str
    line1: str
    city: str
    postal_code: str
    country: str
    line2: str | None = None
    state: str = ""


@dataclass(frozen=True)
class PaymentSummary(ValueObject):
    """Non-sensitive card details echoed back by the payment provider."""

    last4: int
    brand: str
    exp_month: int
    exp_year: int


@dataclass(frozen=True)
class BuyerInfo(ValueObject):
    """Everything about the buyer that the order needs besides the basket."""

    buyer_email: str
    shipping_address: ShippingAddress
    payment_summary: PaymentSummary
    payment_intent_id: str

    def _validate(self) -> None:
        if not self.buyer_email or "@" not in self.buyer_email:
            raise ValueError("Buyer email is invalid")
        if not self.payment_intent_id:
            raise ValueError("Payment intent id is required")


@dataclass(frozen=True)
class OrderItem(ValueObject):
    """
    Snapshot of a purchased line.

    ``price`` is the unit price actually charged (after the product discount);
    ``original_price`` is the list price at the time of purchase.
    """

    product_id: int
    name: str
    price: int
    original_price: int
    quantity: int
    picture_url: str = ""
    variant_id: int | None = None
    variant_color: str | None = None

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderPricing(ValueObject):
    """
    Pricing copied from the basket at checkout, in cents.

    ``subtotal`` is the pre-discount subtotal and ``discount`` is the product
    discount plus the coupon discount.
    """

    subtotal: int
    product_discount: int
    discount: int
    delivery_fee: int

    def _validate(self) -> None:
        for name in ("subtotal", "product_discount", "discount", "delivery_fee"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if self.product_discount > self.discount:
            raise ValueError("product_discount cannot exceed discount")

    @property
    def coupon_discount(self) -> int:
        return self.discount - self.product_discount

    @property
    def total(self) -> int:
        return max(0, self.subtotal + self.delivery_fee - self.discount)


@dataclass(kw_only=True, eq=False)
class Order(AggregateRoot[int]):
    """
    Order aggregate root.

    Example:
        ```python
        order = Order(buyer=buyer, order_items=items, pricing=pricing)
        order.transition_to(OrderStatus.PAYMENT_RECEIVED)
        order.get_total()
        ```
    """

    buyer: BuyerInfo
    order_items: tuple[OrderItem, ...]
    pricing: OrderPricing
    coupon_code: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=lambda: datetime.now(UTC))
    tracking_number: str | None = None
    tracking_added_at: datetime | None = None
    cancelled_at: datetime | None = None

    def __setattr__(self, name: str, value: object) -> None:
        if name in _FROZEN_FIELDS and name in self.__dict__:
            raise InvalidOperationException(
                operation=f"update {name}",
                current_state=str(self.__dict__.get("status", OrderStatus.PENDING).value),
                message="Order line items and pricing cannot change after creation",
            )
        super().__setattr__(name, value)

    # Pricing accessors

    @property
    def subtotal(self) -> int:
        return self.pricing.subtotal

    @property
    def product_discount(self) -> int:
        return self.pricing.product_discount

    @property
    def discount(self) -> int:
        return self.pricing.discount

    @property
    def delivery_fee(self) -> int:
        return self.pricing.delivery_fee

    def get_total(self) -> int:
        """Amount charged in cents: subtotal + delivery fee - discount, floored at zero."""
        return self.pricing.total

    @property
    def buyer_email(self) -> str:
        return self.buyer.buyer_email

    @property
    def payment_intent_id(self) -> str:
        return self.buyer.payment_intent_id

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.order_items)

    # Lifecycle

    def transition_to(self, new_status: OrderStatus) -> None:
        """
        Move the order to a new status.

        Raises:
            InvalidOperationException: If the transition is not allowed
        """
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(
                operation=f"transition to {new_status.value}",
                current_state=self.status.value,
            )

        previous = self.status
        self.status = new_status
        if new_status == OrderStatus.CANCELLED:
            self.cancelled_at = datetime.now(UTC)

        self.increment_version()
        self.touch()
        logger.info(f"Order {self.id} status changed: {previous.value} -> {new_status.value}")

    def set_tracking(self, tracking_number: str) -> None:
        """
        Attach a carrier tracking number.

        Only shipped or later orders can carry tracking.
        """
        if self.status not in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            raise InvalidOperationException(
                operation="set tracking number",
                current_state=self.status.value,
            )
        self.tracking_number = tracking_number
        self.tracking_added_at = datetime.now(UTC)
        self.touch()

    def cancel(self) -> None:
        self.transition_to(OrderStatus.CANCELLED)

    def belongs_to(self, buyer_email: str) -> bool:
        return self.buyer.buyer_email.lower() == buyer_email.lower()
