"""
Shared helpers
"""

from .formatters import DEFAULT_CURRENCY_SYMBOL, currency_format, format_order_amount

__all__ = ["DEFAULT_CURRENCY_SYMBOL", "currency_format", "format_order_amount"]
