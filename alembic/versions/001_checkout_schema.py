"""Checkout schema: catalog, coupons, baskets, shipping rates and orders.

Revision ID: 001_checkout_schema
Revises: None
Create Date: 2026-10-19

Tables created:
- products: catalog with prices in cents and discount sources
- coupons: redeemable promotion codes
- baskets / basket_items: shopping baskets with the applied coupon copied in
- shipping_rates: delivery fee and free-shipping threshold in euros
- orders / order_items: frozen pricing snapshot and line items

Seed data includes the default shipping rate (5.00 fee, free above 100.00).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_checkout_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create checkout tables and seed the default shipping rate."""
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False, comment="List price in cents"),
        sa.Column("picture_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("type", sa.String(100), nullable=True),
        sa.Column("brand", sa.String(100), nullable=True),
        sa.Column("quantity_in_stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("discount_percentage", sa.Numeric(5, 2), nullable=True),
        sa.Column("promotional_price", sa.Integer(), nullable=True, comment="Overrides discount_percentage"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        sa.CheckConstraint("quantity_in_stock >= 0", name="ck_products_stock_non_negative"),
    )
    op.create_index("idx_products_active", "products", ["active"])

    op.create_table(
        "coupons",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("promotion_code", sa.String(100), nullable=False),
        sa.Column("coupon_id", sa.String(100), nullable=False, server_default=""),
        sa.Column("amount_off", sa.Integer(), nullable=True, comment="Flat discount in cents"),
        sa.Column("percent_off", sa.Numeric(5, 2), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "uq_coupons_promotion_code_upper",
        "coupons",
        [sa.text("upper(promotion_code)")],
        unique=True,
    )

    op.create_table(
        "baskets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("basket_id", sa.String(100), nullable=False),
        sa.Column("payment_intent_id", sa.String(200), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("coupon_name", sa.String(100), nullable=True),
        sa.Column("coupon_promotion_code", sa.String(100), nullable=True),
        sa.Column("coupon_external_id", sa.String(100), nullable=True),
        sa.Column("coupon_amount_off", sa.Integer(), nullable=True),
        sa.Column("coupon_percent_off", sa.Numeric(5, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_baskets_basket_id", "baskets", ["basket_id"], unique=True)

    op.create_table(
        "basket_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("basket_fk", sa.Integer(), sa.ForeignKey("baskets.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("variant_id", sa.Integer(), nullable=True),
        sa.Column("variant_color", sa.String(50), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("basket_fk", "product_id", "variant_id", name="uq_basket_items_line"),
    )
    op.create_index("idx_basket_items_basket", "basket_items", ["basket_fk"])

    shipping_rates = op.create_table(
        "shipping_rates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("rate", sa.Numeric(10, 2), nullable=False, comment="Delivery fee in euros"),
        sa.Column("free_shipping_threshold", sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )
    op.bulk_insert(shipping_rates, [{"rate": 5.00, "free_shipping_threshold": 100.00}])

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("buyer_email", sa.String(255), nullable=False),
        sa.Column("payment_intent_id", sa.String(200), nullable=False, unique=True),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("status", sa.String(30), nullable=False, server_default="Pending"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("subtotal", sa.Integer(), nullable=False),
        sa.Column("product_discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("delivery_fee", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("coupon_code", sa.String(100), nullable=True),
        sa.Column("shipping_address", JSONB(), nullable=False),
        sa.Column("payment_summary", JSONB(), nullable=False),
        sa.Column("tracking_number", sa.String(100), nullable=True),
        sa.Column("tracking_added_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_orders_buyer_email", "orders", ["buyer_email"])
    op.create_index("idx_orders_status", "orders", ["status"])
    op.create_index("idx_orders_date", "orders", ["order_date"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("variant_id", sa.Integer(), nullable=True),
        sa.Column("variant_color", sa.String(50), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("picture_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("original_price", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_order_items_order", "order_items", ["order_id"])


def downgrade() -> None:
    """Drop checkout tables."""
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("shipping_rates")
    op.drop_table("basket_items")
    op.drop_table("baskets")
    op.drop_table("coupons")
    op.drop_table("products")
