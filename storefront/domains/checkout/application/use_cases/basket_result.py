"""
Basket Result

What every basket use case returns: the basket and its freshly computed totals.
"""

from dataclasses import dataclass

from storefront.domains.checkout.application.ports import IShippingRateRepository
from storefront.domains.checkout.domain.entities import Basket
from storefront.domains.checkout.domain.services import BasketTotals, PricingService


@dataclass
class BasketResult:
    """Basket state plus totals derived from it."""

    basket: Basket
    totals: BasketTotals


async def price_basket(basket: Basket, shipping_repository: IShippingRateRepository) -> BasketResult:
    """Compute totals for a basket with the current shipping policy."""
    policy = await shipping_repository.get_policy()
    return BasketResult(basket=basket, totals=PricingService(policy).totals_for(basket))
