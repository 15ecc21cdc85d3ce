"""
Checkout Application Ports

Interface definitions (ports) for the checkout domain.
Uses Protocol for structural typing.
"""

from typing import Protocol, runtime_checkable

from storefront.domains.checkout.domain.entities import Basket, Order, Product
from storefront.domains.checkout.domain.value_objects import Coupon, ShippingPolicy


@runtime_checkable
class IBasketRepository(Protocol):
    """
    Interface for basket repository.

    Line items come back priced from the live catalog.
    """

    async def get(self, basket_id: str) -> Basket | None:
        """Get basket by its public id"""
        ...

    async def get_for_update(self, basket_id: str) -> Basket | None:
        """Get basket by its public id, locking it for the current transaction"""
        ...

    async def save(self, basket: Basket) -> Basket:
        """Create or update a basket with its items and coupon"""
        ...


@runtime_checkable
class IProductRepository(Protocol):
    """
    Interface for product repository.

    Defines the contract for catalog data the checkout needs.
    """

    async def get_by_id(self, product_id: int) -> Product | None:
        """Get product by ID"""
        ...

    async def get_many(self, product_ids: list[int], for_update: bool = False) -> list[Product]:
        """Get several products; optionally lock them for stock changes"""
        ...

    async def update_stock(self, product: Product) -> None:
        """Persist the product's quantity in stock"""
        ...


@runtime_checkable
class ICouponRepository(Protocol):
    """Interface for coupon lookup."""

    async def get_by_code(self, code: str) -> Coupon | None:
        """Get an active, unexpired coupon by promotion code"""
        ...


@runtime_checkable
class IShippingRateRepository(Protocol):
    """Interface for the shipping rate store."""

    async def get_policy(self) -> ShippingPolicy:
        """Get the current shipping policy in cents, falling back to defaults"""
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """
    Interface for order repository.

    Defines the contract for order data access.
    """

    async def create(self, order: Order) -> Order:
        """Create a new order"""
        ...

    async def get_by_id(self, order_id: int) -> Order | None:
        """Get order by ID"""
        ...

    async def get_by_payment_intent(self, payment_intent_id: str) -> Order | None:
        """Get the order created for a payment intent"""
        ...

    async def list_by_buyer(self, buyer_email: str) -> list[Order]:
        """Get orders for a buyer, newest first"""
        ...

    async def update(self, order: Order) -> Order:
        """Persist status and tracking changes"""
        ...


__all__ = [
    "IBasketRepository",
    "IProductRepository",
    "ICouponRepository",
    "IShippingRateRepository",
    "IOrderRepository",
]
