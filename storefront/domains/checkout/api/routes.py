"""
Checkout API Routes

FastAPI router for basket and order endpoints. Domain errors raised by the
use cases are turned into responses by the registered exception handlers.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from storefront.config.settings import Settings, get_settings
from storefront.domains.checkout.api.dependencies import (
    get_add_basket_item_use_case,
    get_apply_coupon_use_case,
    get_basket_use_case,
    get_buyer_orders_use_case,
    get_create_order_use_case,
    get_order_use_case,
    get_remove_basket_item_use_case,
    get_remove_coupon_use_case,
    get_update_order_status_use_case,
)
from storefront.domains.checkout.api.schemas import (
    BasketResponse,
    CreateOrderRequest,
    OrderResponse,
    UpdateOrderStatusRequest,
)
from storefront.domains.checkout.application.use_cases import (
    AddBasketItemRequest,
    AddBasketItemUseCase,
    ApplyCouponRequest,
    ApplyCouponUseCase,
    CreateOrderUseCase,
    GetBasketUseCase,
    GetBuyerOrdersUseCase,
    GetOrderUseCase,
    RemoveBasketItemRequest,
    RemoveBasketItemUseCase,
    RemoveCouponUseCase,
    UpdateOrderStatusUseCase,
)
from storefront.domains.checkout.application.use_cases import CreateOrderRequest as CreateOrderCommand
from storefront.domains.checkout.application.use_cases import UpdateOrderStatusRequest as UpdateOrderStatusCommand

router = APIRouter(tags=["Checkout"])


# ==================== BASKET ====================


@router.get("/basket/{basket_id}", response_model=BasketResponse)
async def get_basket(
    basket_id: str,
    use_case: GetBasketUseCase = Depends(get_basket_use_case),
    settings: Settings = Depends(get_settings),
):
    """Get a basket with its current totals."""
    result = await use_case.execute(basket_id)
    return BasketResponse.from_result(result, settings.CURRENCY_SYMBOL)


@router.post("/basket/{basket_id}/items", response_model=BasketResponse)
async def add_basket_item(
    basket_id: str,
    product_id: int = Query(..., alias="productId"),
    quantity: int = Query(...),
    variant_id: int | None = Query(default=None, alias="variantId"),
    variant_color: str | None = Query(default=None, alias="variantColor"),
    use_case: AddBasketItemUseCase = Depends(get_add_basket_item_use_case),
    settings: Settings = Depends(get_settings),
):
    """Add units of a product to the basket, creating the basket if needed."""
    result = await use_case.execute(
        AddBasketItemRequest(
            basket_id=basket_id,
            product_id=product_id,
            quantity=quantity,
            variant_id=variant_id,
            variant_color=variant_color,
        )
    )
    return BasketResponse.from_result(result, settings.CURRENCY_SYMBOL)


@router.delete("/basket/{basket_id}/items", response_model=BasketResponse)
async def remove_basket_item(
    basket_id: str,
    product_id: int = Query(..., alias="productId"),
    quantity: int = Query(...),
    variant_id: int | None = Query(default=None, alias="variantId"),
    use_case: RemoveBasketItemUseCase = Depends(get_remove_basket_item_use_case),
    settings: Settings = Depends(get_settings),
):
    """Remove units of a product from the basket."""
    result = await use_case.execute(
        RemoveBasketItemRequest(
            basket_id=basket_id,
            product_id=product_id,
            quantity=quantity,
            variant_id=variant_id,
        )
    )
    return BasketResponse.from_result(result, settings.CURRENCY_SYMBOL)


@router.post("/basket/{basket_id}/coupon/{code}", response_model=BasketResponse)
async def apply_coupon(
    basket_id: str,
    code: str,
    use_case: ApplyCouponUseCase = Depends(get_apply_coupon_use_case),
    settings: Settings = Depends(get_settings),
):
    """Apply a coupon code, replacing any coupon already on the basket."""
    result = await use_case.execute(ApplyCouponRequest(basket_id=basket_id, code=code))
    return BasketResponse.from_result(result, settings.CURRENCY_SYMBOL)


@router.delete("/basket/{basket_id}/coupon", response_model=BasketResponse)
async def remove_coupon(
    basket_id: str,
    use_case: RemoveCouponUseCase = Depends(get_remove_coupon_use_case),
    settings: Settings = Depends(get_settings),
):
    """Remove the coupon from the basket."""
    result = await use_case.execute(basket_id)
    return BasketResponse.from_result(result, settings.CURRENCY_SYMBOL)


# ==================== ORDERS ====================


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CreateOrderRequest,
    response: Response,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
    settings: Settings = Depends(get_settings),
):
    """
    Create an order from a basket.

    Replaying a payment intent returns the existing order with 200.
    """
    result = await use_case.execute(
        CreateOrderCommand(
            basket_id=request.basket_id,
            buyer_email=request.buyer_email,
            payment_intent_id=request.payment_intent_id,
            shipping_address=request.shipping_address.to_value(),
            payment_summary=request.payment_summary.to_value(),
        )
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return OrderResponse.from_entity(result.order, settings.CURRENCY_SYMBOL)


@router.get("/orders", response_model=list[OrderResponse])
async def list_orders(
    buyer_email: str = Query(..., alias="buyerEmail"),
    use_case: GetBuyerOrdersUseCase = Depends(get_buyer_orders_use_case),
    settings: Settings = Depends(get_settings),
):
    """List a buyer's orders, newest first."""
    result = await use_case.execute(buyer_email)
    return [OrderResponse.from_entity(order, settings.CURRENCY_SYMBOL) for order in result.orders]


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    buyer_email: str = Query(..., alias="buyerEmail"),
    use_case: GetOrderUseCase = Depends(get_order_use_case),
    settings: Settings = Depends(get_settings),
):
    """Get one of the buyer's orders."""
    order = await use_case.execute(order_id, buyer_email)
    return OrderResponse.from_entity(order, settings.CURRENCY_SYMBOL)


@router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    use_case: UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),
    settings: Settings = Depends(get_settings),
):
    """Move an order to a new status, optionally with a tracking number."""
    order = await use_case.execute(
        UpdateOrderStatusCommand(
            order_id=order_id,
            status=request.status,
            tracking_number=request.tracking_number,
        )
    )
    return OrderResponse.from_entity(order, settings.CURRENCY_SYMBOL)
