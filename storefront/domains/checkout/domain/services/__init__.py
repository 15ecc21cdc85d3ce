"""
Checkout Domain Services
"""

from .order_snapshot import finalize_order, snapshot_item
from .pricing_service import BasketTotals, PricingService, compute_final_price, compute_totals

__all__ = [
    "BasketTotals",
    "PricingService",
    "compute_final_price",
    "compute_totals",
    "finalize_order",
    "snapshot_item",
]
