"""
Remove Basket Item Use Case
"""

import logging
from dataclasses import dataclass

from storefront.core.domain import EntityNotFoundException, ValidationException
from storefront.domains.checkout.application.ports import IBasketRepository, IShippingRateRepository

from .basket_result import BasketResult, price_basket

logger = logging.getLogger(__name__)


@dataclass
class RemoveBasketItemRequest:
    """Request for removing units of an item from a basket."""

    basket_id: str
    product_id: int
    quantity: int
    variant_id: int | None = None


class RemoveBasketItemUseCase:
    """
    Use Case: Remove Basket Item

    Decrements the line's quantity; the line is dropped when it reaches zero.
    Removing a product that is not in the basket leaves it unchanged.
    """

    def __init__(
        self,
        basket_repository: IBasketRepository,
        shipping_repository: IShippingRateRepository,
    ):
        self.basket_repository = basket_repository
        self.shipping_repository = shipping_repository

    async def execute(self, request: RemoveBasketItemRequest) -> BasketResult:
        if request.quantity <= 0:
            raise ValidationException("Quantity should be greater than zero", field="quantity")

        basket = await self.basket_repository.get_for_update(request.basket_id)
        if basket is None:
            raise EntityNotFoundException("Basket", request.basket_id)

        if basket.remove_item(request.product_id, request.quantity, request.variant_id):
            basket = await self.basket_repository.save(basket)
            logger.info(
                f"Removed {request.quantity} x product {request.product_id} from basket {request.basket_id}"
            )

        return await price_basket(basket, self.shipping_repository)
