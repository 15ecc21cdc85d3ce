"""
Checkout Application Layer

Use cases and ports for baskets and orders.
"""
