"""
Checkout Dependency Container.

Single Responsibility: wire checkout repositories and use cases for a
database session.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config.settings import Settings, get_settings
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
from storefront.domains.checkout.infrastructure.repositories import (
    SQLAlchemyBasketRepository,
    SQLAlchemyCouponRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyProductRepository,
    SQLAlchemyShippingRateRepository,
)

logger = logging.getLogger(__name__)


class CheckoutContainer:
    """
    Checkout domain container.

    Repositories share the request's session so one request is one transaction.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize checkout container.

        Args:
            settings: Application settings (uses default if not provided)
        """
        self._settings = settings or get_settings()

    # ==================== REPOSITORIES ====================

    def create_basket_repository(self, db: AsyncSession) -> SQLAlchemyBasketRepository:
        return SQLAlchemyBasketRepository(session=db)

    def create_product_repository(self, db: AsyncSession) -> SQLAlchemyProductRepository:
        return SQLAlchemyProductRepository(session=db)

    def create_coupon_repository(self, db: AsyncSession) -> SQLAlchemyCouponRepository:
        return SQLAlchemyCouponRepository(session=db)

    def create_order_repository(self, db: AsyncSession) -> SQLAlchemyOrderRepository:
        return SQLAlchemyOrderRepository(session=db)

    def create_shipping_rate_repository(self, db: AsyncSession) -> SQLAlchemyShippingRateRepository:
        """Create shipping rate repository with the configured fallback policy."""
        return SQLAlchemyShippingRateRepository(
            session=db,
            default_rate=self._settings.DEFAULT_DELIVERY_FEE_CENTS,
            default_threshold=self._settings.DEFAULT_FREE_SHIPPING_THRESHOLD_CENTS,
        )

    # ==================== USE CASES ====================

    def create_get_basket_use_case(self, db: AsyncSession) -> GetBasketUseCase:
        return GetBasketUseCase(
            basket_repository=self.create_basket_repository(db),
            shipping_repository=self.create_shipping_rate_repository(db),
        )

    def create_add_basket_item_use_case(self, db: AsyncSession) -> AddBasketItemUseCase:
        return AddBasketItemUseCase(
            basket_repository=self.create_basket_repository(db),
            product_repository=self.create_product_repository(db),
            shipping_repository=self.create_shipping_rate_repository(db),
        )

    def create_remove_basket_item_use_case(self, db: AsyncSession) -> RemoveBasketItemUseCase:
        return RemoveBasketItemUseCase(
            basket_repository=self.create_basket_repository(db),
            shipping_repository=self.create_shipping_rate_repository(db),
        )

    def create_apply_coupon_use_case(self, db: AsyncSession) -> ApplyCouponUseCase:
        return ApplyCouponUseCase(
            basket_repository=self.create_basket_repository(db),
            coupon_repository=self.create_coupon_repository(db),
            shipping_repository=self.create_shipping_rate_repository(db),
        )

    def create_remove_coupon_use_case(self, db: AsyncSession) -> RemoveCouponUseCase:
        return RemoveCouponUseCase(
            basket_repository=self.create_basket_repository(db),
            shipping_repository=self.create_shipping_rate_repository(db),
        )

    def create_create_order_use_case(self, db: AsyncSession) -> CreateOrderUseCase:
        """Create CreateOrderUseCase with the payment provider limit."""
        return CreateOrderUseCase(
            basket_repository=self.create_basket_repository(db),
            product_repository=self.create_product_repository(db),
            shipping_repository=self.create_shipping_rate_repository(db),
            order_repository=self.create_order_repository(db),
            max_charge_amount=self._settings.PAYMENT_MAX_AMOUNT_CENTS,
        )

    def create_get_order_use_case(self, db: AsyncSession) -> GetOrderUseCase:
        return GetOrderUseCase(order_repository=self.create_order_repository(db))

    def create_get_buyer_orders_use_case(self, db: AsyncSession) -> GetBuyerOrdersUseCase:
        return GetBuyerOrdersUseCase(order_repository=self.create_order_repository(db))

    def create_update_order_status_use_case(self, db: AsyncSession) -> UpdateOrderStatusUseCase:
        return UpdateOrderStatusUseCase(order_repository=self.create_order_repository(db))
