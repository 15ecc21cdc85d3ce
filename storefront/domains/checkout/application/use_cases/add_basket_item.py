"""
Add Basket Item Use Case

Add units of a product to a basket, creating the basket on first use.
"""

import logging
from dataclasses import dataclass

from storefront.core.domain import EntityNotFoundException, ValidationException
from storefront.domains.checkout.application.ports import (
    IBasketRepository,
    IProductRepository,
    IShippingRateRepository,
)
from storefront.domains.checkout.domain.entities import Basket

from .basket_result import BasketResult, price_basket

logger = logging.getLogger(__name__)


@dataclass
class AddBasketItemRequest:
    """Request for adding an item to a basket."""

    basket_id: str
    product_id: int
    quantity: int
    variant_id: int | None = None
    variant_color: str | None = None


class AddBasketItemUseCase:
    """
    Use Case: Add Basket Item

    Responsibilities:
    - Reject non-positive quantities before touching storage
    - Resolve the product from the catalog
    - Merge with an existing line for the same product and variant
    - Persist and return the repriced basket
    """

    def __init__(
        self,
        basket_repository: IBasketRepository,
        product_repository: IProductRepository,
        shipping_repository: IShippingRateRepository,
    ):
        """
        Initialize use case with dependencies.

        Args:
            basket_repository: Repository for basket data access
            product_repository: Repository for catalog lookups
            shipping_repository: Source of the current shipping policy
        """
        self.basket_repository = basket_repository
        self.product_repository = product_repository
        self.shipping_repository = shipping_repository

    async def execute(self, request: AddBasketItemRequest) -> BasketResult:
        """
        Add an item to the basket.

        Raises:
            ValidationException: If quantity is not positive
            EntityNotFoundException: If the product does not exist
        """
        if request.quantity <= 0:
            raise ValidationException("Quantity should be greater than zero", field="quantity")

        product = await self.product_repository.get_by_id(request.product_id)
        if product is None:
            raise EntityNotFoundException("Product", request.product_id)

        basket = await self.basket_repository.get_for_update(request.basket_id)
        if basket is None:
            logger.info(f"Creating basket {request.basket_id}")
            basket = Basket(basket_id=request.basket_id)

        basket.add_item(product, request.quantity, request.variant_id, request.variant_color)
        basket = await self.basket_repository.save(basket)

        logger.info(
            f"Added {request.quantity} x product {request.product_id} to basket {request.basket_id}"
        )
        return await price_basket(basket, self.shipping_repository)
