"""
Storefront models
"""
