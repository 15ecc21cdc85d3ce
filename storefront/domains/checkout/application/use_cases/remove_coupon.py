"""
Remove Coupon Use Case
"""

import logging

from storefront.core.domain import EntityNotFoundException
from storefront.domains.checkout.application.ports import IBasketRepository, IShippingRateRepository

from .basket_result import BasketResult, price_basket

logger = logging.getLogger(__name__)


class RemoveCouponUseCase:
    """Use Case: detach the coupon from a basket."""

    def __init__(
        self,
        basket_repository: IBasketRepository,
        shipping_repository: IShippingRateRepository,
    ):
        self.basket_repository = basket_repository
        self.shipping_repository = shipping_repository

    async def execute(self, basket_id: str) -> BasketResult:
        basket = await self.basket_repository.get_for_update(basket_id)
        if basket is None:
            raise EntityNotFoundException("Basket", basket_id)

        if basket.coupon is not None:
            basket.remove_coupon()
            basket = await self.basket_repository.save(basket)
            logger.info(f"Removed coupon from basket {basket_id}")

        return await price_basket(basket, self.shipping_repository)
