"""
Create Order Use Case

Checkout: turn the buyer's basket into an order with frozen pricing.
"""

import logging
from collections import Counter
from dataclasses import dataclass

from storefront.core.domain import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    InsufficientStockException,
    PaymentException,
    ValidationException,
)
from storefront.domains.checkout.application.ports import (
    IBasketRepository,
    IOrderRepository,
    IProductRepository,
    IShippingRateRepository,
)
from storefront.domains.checkout.domain.entities import (
    Basket,
    BuyerInfo,
    Order,
    PaymentSummary,
    Product,
    ShippingAddress,
)
from storefront.domains.checkout.domain.services import PricingService, finalize_order

logger = logging.getLogger(__name__)


@dataclass
class CreateOrderRequest:
    """Request for creating an order."""

    basket_id: str
    buyer_email: str
    payment_intent_id: str
    shipping_address: ShippingAddress
    payment_summary: PaymentSummary


@dataclass
class CreateOrderResponse:
    """Response from order creation."""

    order: Order
    created: bool = True


class CreateOrderUseCase:
    """
    Use Case: Create Order

    Responsibilities:
    - Return the existing order when the payment intent was already used
    - Validate that every basket line is in stock
    - Compute totals with the current shipping policy
    - Check the total against the payment provider limit
    - Snapshot the basket into an order and take the stock
    - Empty the basket in the same transaction so it cannot be ordered twice
    """

    def __init__(
        self,
        basket_repository: IBasketRepository,
        product_repository: IProductRepository,
        shipping_repository: IShippingRateRepository,
        order_repository: IOrderRepository,
        max_charge_amount: int | None = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            basket_repository: Repository for basket data access
            product_repository: Repository for stock checks and updates
            shipping_repository: Source of the current shipping policy
            order_repository: Repository for order persistence
            max_charge_amount: Largest total in cents a single payment can carry
        """
        self.basket_repository = basket_repository
        self.product_repository = product_repository
        self.shipping_repository = shipping_repository
        self.order_repository = order_repository
        self.max_charge_amount = max_charge_amount

    async def execute(self, request: CreateOrderRequest) -> CreateOrderResponse:
        """
        Create an order from a basket.

        Raises:
            ValidationException: If buyer details are invalid
            EntityNotFoundException: If the basket or a product does not exist
            BusinessRuleViolationException: If the basket is empty
            InsufficientStockException: If a line exceeds available stock
            PaymentException: If the total exceeds the chargeable limit or the basket
                belongs to another payment intent
        """
        buyer = self._build_buyer(request)

        existing = await self.order_repository.get_by_payment_intent(request.payment_intent_id)
        if existing is not None:
            logger.info(f"Order {existing.id} already exists for payment intent {request.payment_intent_id}")
            return CreateOrderResponse(order=existing, created=False)

        basket = await self.basket_repository.get_for_update(request.basket_id)
        if basket is None:
            raise EntityNotFoundException("Basket", request.basket_id)
        if basket.is_empty():
            raise BusinessRuleViolationException(
                rule="order_requires_items",
                message="Cannot create an order from an empty basket",
            )
        if not basket.accepts_payment_intent(request.payment_intent_id):
            raise PaymentException(
                f"Basket {basket.basket_id} is bound to another payment intent",
                payment_id=request.payment_intent_id,
                reason="payment_intent_mismatch",
            )

        products, quantities = await self._reserve_stock(basket)

        policy = await self.shipping_repository.get_policy()
        pricing = PricingService(policy, self.max_charge_amount)
        totals = pricing.totals_for(basket)
        pricing.ensure_chargeable(totals.total, payment_id=request.payment_intent_id)

        order = finalize_order(
            totals,
            basket.items,
            buyer,
            coupon_code=basket.coupon.name if basket.coupon else None,
        )

        for product in products:
            product.remove_stock(quantities[product.id])
            await self.product_repository.update_stock(product)

        created = await self.order_repository.create(order)
        basket.clear_after_checkout()
        await self.basket_repository.save(basket)

        logger.info(
            f"Order {created.id} created for {buyer.buyer_email}: "
            f"subtotal={totals.subtotal} product_discount={totals.product_discount} "
            f"coupon_discount={totals.coupon_discount} delivery_fee={totals.delivery_fee} "
            f"total={totals.total}"
        )
        return CreateOrderResponse(order=created, created=True)

    def _build_buyer(self, request: CreateOrderRequest) -> BuyerInfo:
        try:
            return BuyerInfo(
                buyer_email=request.buyer_email,
                shipping_address=request.shipping_address,
                payment_summary=request.payment_summary,
                payment_intent_id=request.payment_intent_id,
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e

    async def _reserve_stock(self, basket: Basket) -> tuple[list[Product], Counter[int]]:
        """Load and lock the basket's products, checking stock for every product."""
        quantities: Counter[int] = Counter()
        for item in basket.items:
            quantities[item.product_id] += item.quantity

        products = await self.product_repository.get_many(list(quantities), for_update=True)
        found = {product.id for product in products}
        missing = [product_id for product_id in quantities if product_id not in found]
        if missing:
            raise EntityNotFoundException("Product", missing[0])

        for product in products:
            requested = quantities[product.id]
            if not product.has_stock(requested):
                raise InsufficientStockException(
                    product_id=product.id or 0,
                    requested=requested,
                    available=product.quantity_in_stock,
                )

        return products, quantities
