"""
Checkout API
"""
