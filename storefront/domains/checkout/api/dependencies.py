"""
Checkout API Dependencies

FastAPI dependencies for the checkout domain. Each use case gets the
request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config.settings import Settings, get_settings
from storefront.core.container import CheckoutContainer
from storefront.database import get_async_db
from storefront.domains.checkout.application.use_cases import (
    AddBasketItemUseCase,
    ApplyCouponUseCase,
    CreateOrderUseCase,
    GetBasketUseCase,
    GetBuyerOrdersUseCase,
    GetOrderUseCase,
    RemoveBasketItemUseCase,
    RemoveCouponUseCase,
    UpdateOrderStatusUseCase,
)


def get_container(settings: Settings = Depends(get_settings)) -> CheckoutContainer:
    """Get dependency container instance."""
    return CheckoutContainer(settings)


def get_basket_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> GetBasketUseCase:
    return container.create_get_basket_use_case(db)


def get_add_basket_item_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> AddBasketItemUseCase:
    return container.create_add_basket_item_use_case(db)


def get_remove_basket_item_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> RemoveBasketItemUseCase:
    return container.create_remove_basket_item_use_case(db)


def get_apply_coupon_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> ApplyCouponUseCase:
    return container.create_apply_coupon_use_case(db)


def get_remove_coupon_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> RemoveCouponUseCase:
    return container.create_remove_coupon_use_case(db)


def get_create_order_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> CreateOrderUseCase:
    return container.create_create_order_use_case(db)


def get_order_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> GetOrderUseCase:
    return container.create_get_order_use_case(db)


def get_buyer_orders_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> GetBuyerOrdersUseCase:
    return container.create_get_buyer_orders_use_case(db)


def get_update_order_status_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: CheckoutContainer = Depends(get_container),
) -> UpdateOrderStatusUseCase:
    return container.create_update_order_status_use_case(db)


__all__ = [
    "get_container",
    "get_basket_use_case",
    "get_add_basket_item_use_case",
    "get_remove_basket_item_use_case",
    "get_apply_coupon_use_case",
    "get_remove_coupon_use_case",
    "get_create_order_use_case",
    "get_order_use_case",
    "get_buyer_orders_use_case",
    "get_update_order_status_use_case",
]
