"""
Shared pytest fixtures for all tests.

This module provides mock sessions, mock repositories and sample domain
objects used across the unit tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domains.checkout.domain.entities import (
    Basket,
    BasketItem,
    BuyerInfo,
    PaymentSummary,
    Product,
    ShippingAddress,
)
from storefront.domains.checkout.domain.value_objects import (
    NoDiscount,
    PercentageDiscount,
    ShippingPolicy,
)

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def sample_product() -> Product:
    """Product at 50.00 with 10% off and plenty of stock."""
    return Product(
        id=1,
        name="Linen Shirt",
        price=5000,
        picture_url="https://cdn.example.com/shirt.jpg",
        discount_percentage=10,
        quantity_in_stock=20,
    )


@pytest.fixture
def discounted_item() -> BasketItem:
    """Two units at 50.00 with 10% off."""
    return BasketItem(
        product_id=1,
        name="Linen Shirt",
        unit_price=5000,
        quantity=2,
        discount=PercentageDiscount(percentage=10),
    )


@pytest.fixture
def plain_item() -> BasketItem:
    return BasketItem(product_id=2, name="Socks", unit_price=1250, quantity=1, discount=NoDiscount())


@pytest.fixture
def sample_basket(discounted_item: BasketItem) -> Basket:
    return Basket(id=1, basket_id="basket-123", items=[discounted_item])


@pytest.fixture
def buyer_info() -> BuyerInfo:
    return BuyerInfo(
        buyer_email="ana@example.com",
        shipping_address=ShippingAddress(
            name="Ana García",
            line1="Calle Mayor 1",
            city="Madrid",
            postal_code="28013",
            country="ES",
        ),
        payment_summary=PaymentSummary(last4=4242, brand="visa", exp_month=12, exp_year=2030),
        payment_intent_id="pi_123",
    )


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def mock_basket_repository():
    """Create a mock basket repository that echoes saved baskets."""
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=None)
    mock.get_for_update = AsyncMock(return_value=None)
    mock.save = AsyncMock(side_effect=lambda basket: basket)
    return mock


@pytest.fixture
def mock_product_repository():
    """Create a mock product repository."""
    mock = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=None)
    mock.get_many = AsyncMock(return_value=[])
    mock.update_stock = AsyncMock()
    return mock


@pytest.fixture
def mock_coupon_repository():
    mock = AsyncMock()
    mock.get_by_code = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_shipping_repository():
    """Shipping store returning the default 500 / 10000 policy."""
    mock = AsyncMock()
    mock.get_policy = AsyncMock(return_value=ShippingPolicy())
    return mock


@pytest.fixture
def mock_order_repository():
    """Create a mock order repository that assigns id 1 on create."""

    async def _create(order):
        order.id = 1
        return order

    mock = AsyncMock()
    mock.create = AsyncMock(side_effect=_create)
    mock.get_by_id = AsyncMock(return_value=None)
    mock.get_by_payment_intent = AsyncMock(return_value=None)
    mock.list_by_buyer = AsyncMock(return_value=[])
    mock.update = AsyncMock(side_effect=lambda order: order)
    return mock
