"""
Unit tests for the checkout HTTP API.

Use cases are wired to mock repositories through dependency_overrides, so
the full request path (routing, schemas, exception handlers) runs without a
database.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.config.settings import Settings, get_settings
from storefront.core.app_factory import create_app
from storefront.domains.checkout.api import dependencies
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
from storefront.domains.checkout.domain.entities import Basket, Product
from storefront.domains.checkout.domain.services import compute_totals, finalize_order
from storefront.domains.checkout.domain.value_objects import Coupon, CouponKind


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="test", DEBUG=False, CURRENCY_SYMBOL="€")


@pytest.fixture
def client(
    settings,
    mock_basket_repository,
    mock_product_repository,
    mock_coupon_repository,
    mock_shipping_repository,
    mock_order_repository,
):
    """TestClient with every use case bound to the shared mock repositories."""
    app = create_app(settings)
    overrides = {
        get_settings: lambda: settings,
        dependencies.get_basket_use_case: lambda: GetBasketUseCase(mock_basket_repository, mock_shipping_repository),
        dependencies.get_add_basket_item_use_case: lambda: AddBasketItemUseCase(
            mock_basket_repository, mock_product_repository, mock_shipping_repository
        ),
        dependencies.get_remove_basket_item_use_case: lambda: RemoveBasketItemUseCase(
            mock_basket_repository, mock_shipping_repository
        ),
        dependencies.get_apply_coupon_use_case: lambda: ApplyCouponUseCase(
            mock_basket_repository, mock_coupon_repository, mock_shipping_repository
        ),
        dependencies.get_remove_coupon_use_case: lambda: RemoveCouponUseCase(
            mock_basket_repository, mock_shipping_repository
        ),
        dependencies.get_create_order_use_case: lambda: CreateOrderUseCase(
            mock_basket_repository,
            mock_product_repository,
            mock_shipping_repository,
            mock_order_repository,
            max_charge_amount=settings.PAYMENT_MAX_AMOUNT_CENTS,
        ),
        dependencies.get_order_use_case: lambda: GetOrderUseCase(mock_order_repository),
        dependencies.get_buyer_orders_use_case: lambda: GetBuyerOrdersUseCase(mock_order_repository),
        dependencies.get_update_order_status_use_case: lambda: UpdateOrderStatusUseCase(mock_order_repository),
    }
    app.dependency_overrides.update(overrides)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def order_payload() -> dict:
    return {
        "basketId": "basket-123",
        "buyerEmail": "ana@example.com",
        "paymentIntentId": "pi_123",
        "shippingAddress": {
            "name": "Ana García",
            "line1": "Calle Mayor 1",
            "city": "Madrid",
            "postalCode": "28013",
            "country": "ES",
        },
        "paymentSummary": {"last4": 4242, "brand": "visa", "expMonth": 12, "expYear": 2030},
    }


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "X-Correlation-ID" in response.headers


class TestBasketRoutes:
    """Tests for /api/v1/basket endpoints."""

    def test_get_basket(self, client, mock_basket_repository, sample_basket):
        mock_basket_repository.get.return_value = sample_basket

        response = client.get("/api/v1/basket/basket-123")

        assert response.status_code == 200
        body = response.json()
        assert body["basketId"] == "basket-123"
        assert body["items"][0]["productId"] == 1
        assert body["items"][0]["price"] == 5000
        assert body["items"][0]["discountPercentage"] == 10.0
        assert body["coupon"] is None
        assert body["totals"] == {
            "subtotal": 10000,
            "productDiscount": 1000,
            "couponDiscount": 0,
            "discount": 1000,
            "deliveryFee": 500,
            "total": 9500,
            "formattedTotal": "€95.00",
        }

    def test_add_item(self, client, mock_product_repository, sample_product):
        mock_product_repository.get_by_id.return_value = sample_product

        response = client.post("/api/v1/basket/new-basket/items", params={"productId": 1, "quantity": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["items"][0]["quantity"] == 3
        assert body["totals"]["subtotal"] == 15000
        assert body["totals"]["deliveryFee"] == 0

    def test_add_item_zero_quantity_is_bad_request(self, client):
        response = client.post("/api/v1/basket/b/items", params={"productId": 1, "quantity": 0})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_add_unknown_product_is_not_found(self, client):
        response = client.post("/api/v1/basket/b/items", params={"productId": 404, "quantity": 1})

        assert response.status_code == 404

    def test_add_item_missing_params(self, client):
        response = client.post("/api/v1/basket/b/items")

        assert response.status_code == 422

    def test_remove_item(self, client, mock_basket_repository, sample_basket):
        mock_basket_repository.get_for_update.return_value = sample_basket

        response = client.delete("/api/v1/basket/basket-123/items", params={"productId": 1, "quantity": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["items"] == []
        assert body["totals"]["subtotal"] == 0
        assert body["totals"]["deliveryFee"] == 500
        assert body["totals"]["total"] == 500

    def test_apply_coupon(self, client, mock_basket_repository, mock_coupon_repository, sample_basket):
        mock_basket_repository.get_for_update.return_value = sample_basket
        mock_coupon_repository.get_by_code.return_value = Coupon(
            kind=CouponKind.PERCENT_OFF,
            name="TEN",
            promotion_code="TEN",
            coupon_id="c_10",
            percent_off=Decimal("10"),
        )

        response = client.post("/api/v1/basket/basket-123/coupon/TEN")

        assert response.status_code == 200
        body = response.json()
        assert body["coupon"] == {
            "name": "TEN",
            "amountOff": None,
            "percentOff": 10.0,
            "promotionCode": "TEN",
            "couponId": "c_10",
        }
        assert body["totals"]["couponDiscount"] == 1000
        assert body["totals"]["total"] == 8500

    def test_apply_invalid_coupon(self, client):
        response = client.post("/api/v1/basket/basket-123/coupon/NOPE")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_COUPON"

    def test_remove_coupon(self, client, mock_basket_repository, sample_basket):
        sample_basket.apply_coupon(Coupon(kind=CouponKind.AMOUNT_OFF, name="FIVE", amount_off=500))
        mock_basket_repository.get_for_update.return_value = sample_basket

        response = client.delete("/api/v1/basket/basket-123/coupon")

        assert response.status_code == 200
        assert response.json()["coupon"] is None
        assert response.json()["totals"]["total"] == 9500


class TestOrderRoutes:
    """Tests for /api/v1/orders endpoints."""

    def test_create_order(
        self, client, mock_basket_repository, mock_product_repository, sample_basket, sample_product, order_payload
    ):
        mock_basket_repository.get_for_update.return_value = sample_basket
        mock_product_repository.get_many.return_value = [sample_product]

        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["subtotal"] == 10000
        assert body["productDiscount"] == 1000
        assert body["discount"] == 1000
        assert body["deliveryFee"] == 500
        assert body["total"] == 9500
        assert body["formattedTotal"] == "€95.00"
        assert body["orderStatus"] == "Pending"
        assert body["orderItems"][0]["price"] == 4500
        assert body["orderItems"][0]["originalPrice"] == 5000
        assert body["shippingAddress"]["postalCode"] == "28013"

    def test_second_checkout_of_same_basket_is_conflict(
        self, client, mock_basket_repository, mock_product_repository, sample_basket, sample_product, order_payload
    ):
        mock_basket_repository.get_for_update.return_value = sample_basket
        mock_product_repository.get_many.return_value = [sample_product]
        first = client.post("/api/v1/orders", json=order_payload)

        response = client.post("/api/v1/orders", json={**order_payload, "paymentIntentId": "pi_456"})

        assert first.status_code == 201
        assert response.status_code == 409
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"
        assert sample_product.quantity_in_stock == 18

    def test_replayed_payment_intent_returns_200(
        self, client, mock_order_repository, sample_basket, buyer_info, order_payload
    ):
        existing = finalize_order(compute_totals(sample_basket.items), sample_basket.items, buyer_info)
        existing.id = 5
        mock_order_repository.get_by_payment_intent.return_value = existing

        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 200
        assert response.json()["id"] == 5

    def test_insufficient_stock_is_conflict(
        self, client, mock_basket_repository, mock_product_repository, sample_basket, order_payload
    ):
        mock_basket_repository.get_for_update.return_value = sample_basket
        mock_product_repository.get_many.return_value = [Product(id=1, name="Shirt", price=5000, quantity_in_stock=0)]

        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 409
        assert response.json()["code"] == "INSUFFICIENT_STOCK"

    def test_total_above_payment_limit(
        self, client, mock_basket_repository, mock_product_repository, order_payload
    ):
        product = Product(id=5, name="Piano", price=600000, quantity_in_stock=1)
        basket = Basket(id=1, basket_id="basket-123")
        basket.add_item(product, 1)
        mock_basket_repository.get_for_update.return_value = basket
        mock_product_repository.get_many.return_value = [product]

        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 422
        assert response.json()["code"] == "PAYMENT_ERROR"

    def test_invalid_body(self, client, order_payload):
        del order_payload["shippingAddress"]

        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"

    def test_get_order(self, client, mock_order_repository, sample_basket, buyer_info):
        order = finalize_order(compute_totals(sample_basket.items), sample_basket.items, buyer_info)
        order.id = 7
        mock_order_repository.get_by_id.return_value = order

        response = client.get("/api/v1/orders/7", params={"buyerEmail": "ana@example.com"})

        assert response.status_code == 200
        assert response.json()["buyerEmail"] == "ana@example.com"

    def test_get_order_of_other_buyer(self, client, mock_order_repository, sample_basket, buyer_info):
        order = finalize_order(compute_totals(sample_basket.items), sample_basket.items, buyer_info)
        order.id = 7
        mock_order_repository.get_by_id.return_value = order

        response = client.get("/api/v1/orders/7", params={"buyerEmail": "eve@example.com"})

        assert response.status_code == 404

    def test_list_orders(self, client, mock_order_repository, sample_basket, buyer_info):
        order = finalize_order(compute_totals(sample_basket.items), sample_basket.items, buyer_info)
        order.id = 7
        mock_order_repository.list_by_buyer.return_value = [order]

        response = client.get("/api/v1/orders", params={"buyerEmail": "ana@example.com"})

        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [7]

    def test_update_status(self, client, mock_order_repository, sample_basket, buyer_info):
        order = finalize_order(compute_totals(sample_basket.items), sample_basket.items, buyer_info)
        order.id = 7
        mock_order_repository.get_by_id.return_value = order

        response = client.patch("/api/v1/orders/7/status", json={"status": "PaymentReceived"})

        assert response.status_code == 200
        assert response.json()["orderStatus"] == "PaymentReceived"
        assert response.json()["total"] == 9500

    def test_invalid_status_transition_is_conflict(self, client, mock_order_repository, sample_basket, buyer_info):
        order = finalize_order(compute_totals(sample_basket.items), sample_basket.items, buyer_info)
        order.id = 7
        mock_order_repository.get_by_id.return_value = order

        response = client.patch("/api/v1/orders/7/status", json={"status": "Delivered"})

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_OPERATION"
