"""
Get Basket Use Case

Read a basket with its totals.
"""

import logging

from storefront.domains.checkout.application.ports import IBasketRepository, IShippingRateRepository
from storefront.domains.checkout.domain.entities import Basket

from .basket_result import BasketResult, price_basket

logger = logging.getLogger(__name__)


class GetBasketUseCase:
    """
    Use Case: Get Basket

    An unknown basket id reads as an empty basket; nothing is persisted.
    """

    def __init__(
        self,
        basket_repository: IBasketRepository,
        shipping_repository: IShippingRateRepository,
    ):
        self.basket_repository = basket_repository
        self.shipping_repository = shipping_repository

    async def execute(self, basket_id: str) -> BasketResult:
        basket = await self.basket_repository.get(basket_id)
        if basket is None:
            logger.debug(f"Basket {basket_id} not found, returning empty basket")
            basket = Basket(basket_id=basket_id)
        return await price_basket(basket, self.shipping_repository)
