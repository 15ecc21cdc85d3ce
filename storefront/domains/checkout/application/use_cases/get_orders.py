"""
Get Orders Use Cases

Read orders for a buyer.
"""

import logging
from dataclasses import dataclass, field

from storefront.core.domain import EntityNotFoundException
from storefront.domains.checkout.application.ports import IOrderRepository
from storefront.domains.checkout.domain.entities import Order

logger = logging.getLogger(__name__)


class GetOrderUseCase:
    """
    Use Case: Get Order

    An order belonging to another buyer is reported as not found.
    """

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, order_id: int, buyer_email: str) -> Order:
        order = await self.order_repository.get_by_id(order_id)
        if order is None or not order.belongs_to(buyer_email):
            raise EntityNotFoundException("Order", order_id)
        return order


@dataclass
class GetBuyerOrdersResponse:
    """Response with a buyer's orders."""

    orders: list[Order] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.orders)


class GetBuyerOrdersUseCase:
    """Use Case: list a buyer's orders, newest first."""

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, buyer_email: str) -> GetBuyerOrdersResponse:
        orders = await self.order_repository.list_by_buyer(buyer_email)
        logger.debug(f"Found {len(orders)} orders for {buyer_email}")
        return GetBuyerOrdersResponse(orders=orders)
