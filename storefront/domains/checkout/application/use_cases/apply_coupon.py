"""
Apply Coupon Use Case

Look up a promotion code and attach the coupon to a basket.
"""

import logging
from dataclasses import dataclass

from storefront.core.domain import EntityNotFoundException, InvalidCouponException
from storefront.domains.checkout.application.ports import (
    IBasketRepository,
    ICouponRepository,
    IShippingRateRepository,
)

from .basket_result import BasketResult, price_basket

logger = logging.getLogger(__name__)


@dataclass
class ApplyCouponRequest:
    """Request for applying a coupon code."""

    basket_id: str
    code: str


class ApplyCouponUseCase:
    """
    Use Case: Apply Coupon

    A basket holds at most one coupon; applying a new one replaces it.
    """

    def __init__(
        self,
        basket_repository: IBasketRepository,
        coupon_repository: ICouponRepository,
        shipping_repository: IShippingRateRepository,
    ):
        self.basket_repository = basket_repository
        self.coupon_repository = coupon_repository
        self.shipping_repository = shipping_repository

    async def execute(self, request: ApplyCouponRequest) -> BasketResult:
        """
        Apply a coupon to the basket.

        Raises:
            InvalidCouponException: If the code is unknown, inactive or expired
            EntityNotFoundException: If the basket does not exist
        """
        code = request.code.strip()
        coupon = await self.coupon_repository.get_by_code(code) if code else None
        if coupon is None:
            logger.info(f"Rejected coupon code {code!r} for basket {request.basket_id}")
            raise InvalidCouponException(code)

        basket = await self.basket_repository.get_for_update(request.basket_id)
        if basket is None:
            raise EntityNotFoundException("Basket", request.basket_id)

        basket.apply_coupon(coupon)
        basket = await self.basket_repository.save(basket)

        logger.info(f"Applied coupon {coupon.name} to basket {request.basket_id}")
        return await price_basket(basket, self.shipping_repository)
