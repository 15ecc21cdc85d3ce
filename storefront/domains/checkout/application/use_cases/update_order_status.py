"""
Update Order Status Use Case

Move an order through its lifecycle. Pricing is never touched.
"""

import logging
from dataclasses import dataclass

from storefront.core.domain import EntityNotFoundException, ValidationException
from storefront.domains.checkout.application.ports import IOrderRepository
from storefront.domains.checkout.domain.entities import Order
from storefront.domains.checkout.domain.value_objects import OrderStatus

logger = logging.getLogger(__name__)


@dataclass
class UpdateOrderStatusRequest:
    """Request for changing an order's status."""

    order_id: int
    status: str
    tracking_number: str | None = None


class UpdateOrderStatusUseCase:
    """
    Use Case: Update Order Status

    Setting the current status again only updates the tracking number.
    """

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, request: UpdateOrderStatusRequest) -> Order:
        """
        Apply a status change.

        Raises:
            ValidationException: If the status name is unknown
            EntityNotFoundException: If the order does not exist
            InvalidOperationException: If the transition is not allowed
        """
        try:
            new_status = OrderStatus.from_string(request.status)
        except ValueError as e:
            raise ValidationException(str(e), field="status") from e

        order = await self.order_repository.get_by_id(request.order_id)
        if order is None:
            raise EntityNotFoundException("Order", request.order_id)

        if new_status != order.status:
            order.transition_to(new_status)
        if request.tracking_number:
            order.set_tracking(request.tracking_number)

        return await self.order_repository.update(order)
