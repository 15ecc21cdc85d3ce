"""
Checkout Domain

Baskets, coupons, pricing and orders for the storefront.
"""
