"""
Order Status Value Object

Lifecycle states of an order. Status changes never touch the frozen
pricing fields of the order.
"""

from storefront.core.domain import StatusEnum


class OrderStatus(StatusEnum):
    """
    Order lifecycle states.

    Valid transitions:
    - PENDING -> PAYMENT_RECEIVED, PAYMENT_FAILED, PAYMENT_MISMATCH, CANCELLED
    - PAYMENT_FAILED -> PAYMENT_RECEIVED, CANCELLED
    - PAYMENT_MISMATCH -> PAYMENT_RECEIVED, CANCELLED
    - PAYMENT_RECEIVED -> PROCESSING, CANCELLED
    - PROCESSING -> PROCESSED, CANCELLED
    - PROCESSED -> SHIPPED, CANCELLED
    - SHIPPED -> DELIVERED
    - DELIVERED -> COMPLETED, REVIEW_REQUESTED
    - REVIEW_REQUESTED -> COMPLETED
    - CANCELLED, COMPLETED -> (terminal states)
    """

    PENDING = "Pending"
    PAYMENT_RECEIVED = "PaymentReceived"
    PAYMENT_FAILED = "PaymentFailed"
    PAYMENT_MISMATCH = "PaymentMismatch"
    PROCESSING = "Processing"
    PROCESSED = "Processed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REVIEW_REQUESTED = "ReviewRequested"
    COMPLETED = "Completed"

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        return new_status in _TRANSITIONS.get(self, ())

    def get_valid_transitions(self) -> list["OrderStatus"]:
        """Get list of valid next statuses."""
        return list(_TRANSITIONS.get(self, ()))

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state."""
        return not _TRANSITIONS.get(self)

    def is_paid(self) -> bool:
        """Check if payment has been received for the order."""
        return self not in (OrderStatus.PENDING, OrderStatus.PAYMENT_FAILED, OrderStatus.PAYMENT_MISMATCH)

    def can_be_cancelled(self) -> bool:
        """Check if order can be cancelled in this state."""
        return OrderStatus.CANCELLED in _TRANSITIONS.get(self, ())


_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (
        OrderStatus.PAYMENT_RECEIVED,
        OrderStatus.PAYMENT_FAILED,
        OrderStatus.PAYMENT_MISMATCH,
        OrderStatus.CANCELLED,
    ),
    OrderStatus.PAYMENT_FAILED: (OrderStatus.PAYMENT_RECEIVED, OrderStatus.CANCELLED),
    OrderStatus.PAYMENT_MISMATCH: (OrderStatus.PAYMENT_RECEIVED, OrderStatus.CANCELLED),
    OrderStatus.PAYMENT_RECEIVED: (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    OrderStatus.PROCESSING: (OrderStatus.PROCESSED, OrderStatus.CANCELLED),
    OrderStatus.PROCESSED: (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (OrderStatus.COMPLETED, OrderStatus.REVIEW_REQUESTED),
    OrderStatus.REVIEW_REQUESTED: (OrderStatus.COMPLETED,),
    OrderStatus.CANCELLED: (),
    OrderStatus.COMPLETED: (),
}
