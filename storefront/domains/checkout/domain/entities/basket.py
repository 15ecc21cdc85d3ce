"""
Basket Aggregate

The buyer's pre-purchase collection of line items and optional coupon.
Totals are never stored on the basket; they are computed from its current
state by the pricing service on every read.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.domain import AggregateRoot, ValidationException

from ..value_objects.coupon import Coupon
from ..value_objects.discount import NoDiscount, PercentageDiscount, ProductDiscount, PromotionalPrice
from .product import Product

logger = logging.getLogger(__name__)


@dataclass
class BasketItem:
    """
    Line item in a basket.

    ``unit_price`` is the live list price in cents; ``discount`` is the
    product's current discount source.
    """

    product_id: int
    name: str
    unit_price: int
    quantity: int
    picture_url: str = ""
    variant_id: int | None = None
    variant_color: str | None = None
    discount: ProductDiscount = field(default_factory=NoDiscount)

    @property
    def final_price(self) -> int:
        """Unit price after the product-level discount."""
        return self.discount.final_price(self.unit_price)

    @property
    def discount_percentage(self) -> Decimal | None:
        if isinstance(self.discount, PercentageDiscount):
            return self.discount.percentage
        return None

    @property
    def promotional_price(self) -> int | None:
        if isinstance(self.discount, PromotionalPrice):
            return self.discount.price
        return None

    def matches(self, product_id: int, variant_id: int | None) -> bool:
        return self.product_id == product_id and self.variant_id == variant_id

    @classmethod
    def from_product(
        cls,
        product: Product,
        quantity: int,
        variant_id: int | None = None,
        variant_color: str | None = None,
    ) -> "BasketItem":
        """Create a line item priced from the current catalog product."""
        return cls(
            product_id=product.id or 0,
            name=product.name,
            unit_price=product.price,
            quantity=quantity,
            picture_url=product.picture_url,
            variant_id=variant_id,
            variant_color=variant_color,
            discount=product.discount,
        )


@dataclass(kw_only=True, eq=False)
class Basket(AggregateRoot[int]):
    """
    Basket aggregate root.

    Example:
        ```python
        basket = Basket(basket_id="b-123")
        basket.add_item(product, quantity=2)
        basket.apply_coupon(coupon)
        ```
    """

    basket_id: str
    items: list[BasketItem] = field(default_factory=list)
    coupon: Coupon | None = None
    payment_intent_id: str | None = None

    def add_item(
        self,
        product: Product,
        quantity: int,
        variant_id: int | None = None,
        variant_color: str | None = None,
    ) -> BasketItem:
        """
        Add units of a product (and optional variant) to the basket.

        Args:
            product: Catalog product
            quantity: Units to add, must be positive
            variant_id: Optional product variant

        Returns:
            The created or updated line item

        Raises:
            ValidationException: If quantity is not positive
        """
        self._validate_quantity(quantity)

        existing = self.find_item(product.id or 0, variant_id)
        if existing is None:
            existing = BasketItem.from_product(product, quantity, variant_id, variant_color)
            self.items.append(existing)
        else:
            existing.quantity += quantity

        self._mark_changed()
        return existing

    def remove_item(self, product_id: int, quantity: int, variant_id: int | None = None) -> bool:
        """
        Remove units of a product; the line disappears when it reaches zero.

        Returns:
            True if a matching line was found
        """
        self._validate_quantity(quantity)

        item = self.find_item(product_id, variant_id)
        if item is None:
            logger.debug(f"Basket {self.basket_id}: product {product_id} not in basket, nothing to remove")
            return False

        item.quantity -= quantity
        if item.quantity <= 0:
            self.items.remove(item)

        self._mark_changed()
        return True

    def apply_coupon(self, coupon: Coupon) -> None:
        """Attach a coupon, replacing any coupon already applied."""
        self.coupon = coupon
        self._mark_changed()

    def remove_coupon(self) -> None:
        """Detach the current coupon, if any."""
        self.coupon = None
        self._mark_changed()

    def clear_after_checkout(self) -> None:
        """Empty the basket once its contents have become an order."""
        self.items.clear()
        self.coupon = None
        self.payment_intent_id = None
        self._mark_changed()

    def accepts_payment_intent(self, payment_intent_id: str) -> bool:
        """A basket bound to a payment intent only checks out with that intent."""
        return self.payment_intent_id is None or self.payment_intent_id == payment_intent_id

    def find_item(self, product_id: int, variant_id: int | None = None) -> BasketItem | None:
        return next((item for item in self.items if item.matches(product_id, variant_id)), None)

    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        """Total number of units (sum of quantities)."""
        return sum(item.quantity for item in self.items)

    def _validate_quantity(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationException("Quantity should be greater than zero", field="quantity")

    def _mark_changed(self) -> None:
        self.increment_version()
        self.touch()
