"""
Shared Formatters

Display helpers for monetary amounts. These are the only place where cents
are turned into major units; nothing downstream computes on their output.
"""

from decimal import Decimal

from storefront.core.domain.value_objects import CENTS_PER_UNIT

DEFAULT_CURRENCY_SYMBOL = "€"


def currency_format(cents: int, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Format an amount in cents for display.

    Args:
        cents: Amount in the smallest currency unit
        symbol: Currency symbol prefix

    Returns:
        Formatted string like "€12.34"
    """
    amount = (Decimal(cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))
    return f"{symbol}{amount:.2f}"


def format_order_amount(cents: int | None, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Format a stored order amount.

    Missing amounts render as zero. Stored amounts are cents by contract and
    are passed through unchanged; legacy rows in another scale must be
    corrected when they are migrated, not here.
    """
    if cents is None:
        return currency_format(0, symbol)
    return currency_format(cents, symbol)
