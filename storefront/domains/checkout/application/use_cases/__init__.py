"""
Checkout Use Cases

Business use cases for baskets and orders.
Each use case represents a single business operation.
"""

from .add_basket_item import AddBasketItemRequest, AddBasketItemUseCase
from .apply_coupon import ApplyCouponRequest, ApplyCouponUseCase
from .basket_result import BasketResult, price_basket
from .create_order import CreateOrderRequest, CreateOrderResponse, CreateOrderUseCase
from .get_basket import GetBasketUseCase
from .get_orders import GetBuyerOrdersResponse, GetBuyerOrdersUseCase, GetOrderUseCase
from .remove_basket_item import RemoveBasketItemRequest, RemoveBasketItemUseCase
from .remove_coupon import RemoveCouponUseCase
from .update_order_status import UpdateOrderStatusRequest, UpdateOrderStatusUseCase

__all__ = [
    # Basket
    "BasketResult",
    "price_basket",
    "GetBasketUseCase",
    "AddBasketItemRequest",
    "AddBasketItemUseCase",
    "RemoveBasketItemRequest",
    "RemoveBasketItemUseCase",
    "ApplyCouponRequest",
    "ApplyCouponUseCase",
    "RemoveCouponUseCase",
    # Orders
    "CreateOrderRequest",
    "CreateOrderResponse",
    "CreateOrderUseCase",
    "GetOrderUseCase",
    "GetBuyerOrdersResponse",
    "GetBuyerOrdersUseCase",
    "UpdateOrderStatusRequest",
    "UpdateOrderStatusUseCase",
]
