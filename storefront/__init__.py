"""
Storefront checkout service

Basket pricing, coupons and order snapshots for an online shop.
"""

__version__ = "0.1.0"
