"""
Checkout API Schemas

Pydantic schemas for API request/response validation. JSON uses camelCase
and every amount is an integer number of cents.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.core.shared import currency_format, format_order_amount
from storefront.domains.checkout.application.use_cases import BasketResult
from storefront.domains.checkout.domain.entities import (
    BasketItem,
    Order,
    OrderItem,
    PaymentSummary,
    ShippingAddress,
)
from storefront.domains.checkout.domain.services import BasketTotals
from storefront.domains.checkout.domain.value_objects import Coupon


class CamelModel(BaseModel):
    """Base schema serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== BASKET ====================


class BasketItemResponse(CamelModel):
    """Basket line item."""

    product_id: int
    name: str
    price: int
    picture_url: str
    quantity: int
    discount_percentage: float | None = None
    promotional_price: int | None = None
    variant_id: int | None = None
    variant_color: str | None = None

    @classmethod
    def from_entity(cls, item: BasketItem) -> "BasketItemResponse":
        return cls(
            product_id=item.product_id,
            name=item.name,
            price=item.unit_price,
            picture_url=item.picture_url,
            quantity=item.quantity,
            discount_percentage=float(item.discount_percentage) if item.discount_percentage is not None else None,
            promotional_price=item.promotional_price,
            variant_id=item.variant_id,
            variant_color=item.variant_color,
        )


class CouponResponse(CamelModel):
    """Coupon applied to a basket."""

    name: str
    amount_off: int | None = None
    percent_off: float | None = None
    promotion_code: str
    coupon_id: str

    @classmethod
    def from_value(cls, coupon: Coupon) -> "CouponResponse":
        return cls(
            name=coupon.name,
            amount_off=coupon.amount_off,
            percent_off=float(coupon.percent_off) if coupon.percent_off is not None else None,
            promotion_code=coupon.promotion_code,
            coupon_id=coupon.coupon_id,
        )


class BasketTotalsResponse(CamelModel):
    """Totals derived from the basket on this read."""

    subtotal: int
    product_discount: int
    coupon_discount: int
    discount: int
    delivery_fee: int
    total: int
    formatted_total: str

    @classmethod
    def from_totals(cls, totals: BasketTotals, symbol: str) -> "BasketTotalsResponse":
        return cls(
            subtotal=totals.subtotal,
            product_discount=totals.product_discount,
            coupon_discount=totals.coupon_discount,
            discount=totals.discount,
            delivery_fee=totals.delivery_fee,
            total=totals.total,
            formatted_total=currency_format(totals.total, symbol),
        )


class BasketResponse(CamelModel):
    """Basket response schema."""

    basket_id: str
    items: list[BasketItemResponse]
    coupon: CouponResponse | None = None
    totals: BasketTotalsResponse

    @classmethod
    def from_result(cls, result: BasketResult, symbol: str) -> "BasketResponse":
        basket = result.basket
        return cls(
            basket_id=basket.basket_id,
            items=[BasketItemResponse.from_entity(item) for item in basket.items],
            coupon=CouponResponse.from_value(basket.coupon) if basket.coupon else None,
            totals=BasketTotalsResponse.from_totals(result.totals, symbol),
        )


# ==================== ORDERS ====================


class ShippingAddressSchema(CamelModel):
    """Shipping address schema."""

    name: str = Field(..., min_length=1, max_length=200)
    line1: str = Field(..., min_length=1, max_length=200)
    line2: str | None = Field(default=None, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(default="", max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=2, max_length=2)

    def to_value(self) -> ShippingAddress:
        return ShippingAddress(
            name=self.name,
            line1=self.line1,
            line2=self.line2,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            country=self.country,
        )

    @classmethod
    def from_value(cls, address: ShippingAddress) -> "ShippingAddressSchema":
        return cls(
            name=address.name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
        )


class PaymentSummarySchema(CamelModel):
    """Card summary returned by the payment provider."""

    last4: int = Field(..., ge=0, le=9999)
    brand: str = Field(..., min_length=1, max_length=50)
    exp_month: int = Field(..., ge=1, le=12)
    exp_year: int = Field(..., ge=2000)

    def to_value(self) -> PaymentSummary:
        return PaymentSummary(
            last4=self.last4,
            brand=self.brand,
            exp_month=self.exp_month,
            exp_year=self.exp_year,
        )

    @classmethod
    def from_value(cls, payment: PaymentSummary) -> "PaymentSummarySchema":
        return cls(
            last4=payment.last4,
            brand=payment.brand,
            exp_month=payment.exp_month,
            exp_year=payment.exp_year,
        )


class CreateOrderRequest(CamelModel):
    """Create order request schema."""

    basket_id: str = Field(..., min_length=1, max_length=100)
    buyer_email: str = Field(..., min_length=3, max_length=255)
    payment_intent_id: str = Field(..., min_length=1, max_length=200)
    shipping_address: ShippingAddressSchema
    payment_summary: PaymentSummarySchema


class UpdateOrderStatusRequest(CamelModel):
    """Order status change request schema."""

    status: str = Field(..., min_length=1)
    tracking_number: str | None = Field(default=None, max_length=100)


class OrderItemResponse(CamelModel):
    """Order line snapshot."""

    product_id: int
    variant_id: int | None = None
    variant_color: str | None = None
    name: str
    picture_url: str
    price: int
    original_price: int
    quantity: int

    @classmethod
    def from_value(cls, item: OrderItem) -> "OrderItemResponse":
        return cls(
            product_id=item.product_id,
            variant_id=item.variant_id,
            variant_color=item.variant_color,
            name=item.name,
            picture_url=item.picture_url,
            price=item.price,
            original_price=item.original_price,
            quantity=item.quantity,
        )


class OrderResponse(CamelModel):
    """Order response schema."""

    id: int
    buyer_email: str
    order_date: datetime
    subtotal: int
    delivery_fee: int
    product_discount: int
    discount: int
    total: int
    formatted_total: str
    coupon_code: str | None = None
    order_status: str
    tracking_number: str | None = None
    shipping_address: ShippingAddressSchema
    payment_summary: PaymentSummarySchema
    order_items: list[OrderItemResponse]

    @classmethod
    def from_entity(cls, order: Order, symbol: str) -> "OrderResponse":
        total = order.get_total()
        return cls(
            id=order.id or 0,
            buyer_email=order.buyer_email,
            order_date=order.order_date,
            subtotal=order.subtotal,
            delivery_fee=order.delivery_fee,
            product_discount=order.product_discount,
            discount=order.discount,
            total=total,
            formatted_total=format_order_amount(total, symbol),
            coupon_code=order.coupon_code,
            order_status=order.status.value,
            tracking_number=order.tracking_number,
            shipping_address=ShippingAddressSchema.from_value(order.buyer.shipping_address),
            payment_summary=PaymentSummarySchema.from_value(order.buyer.payment_summary),
            order_items=[OrderItemResponse.from_value(item) for item in order.order_items],
        )
