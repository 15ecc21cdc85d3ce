"""
Checkout Infrastructure Layer
"""
