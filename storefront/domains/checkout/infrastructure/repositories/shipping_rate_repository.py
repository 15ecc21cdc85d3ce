"""
Shipping Rate Repository Implementation

Reads the shipping rate row (stored in euros) and turns it into a policy in
cents. A missing row or a failed read falls back to the configured defaults.
"""

import logging
from decimal import Decimal
from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domains.checkout.application.ports import IShippingRateRepository
from storefront.domains.checkout.domain.value_objects import (
    DEFAULT_DELIVERY_FEE,
    DEFAULT_FREE_SHIPPING_THRESHOLD,
    ShippingPolicy,
)
from storefront.models.db.shipping import ShippingRate as ShippingRateModel

logger = logging.getLogger(__name__)


class SQLAlchemyShippingRateRepository(IShippingRateRepository):
    """SQLAlchemy implementation of the shipping rate store."""

    def __init__(
        self,
        session: AsyncSession,
        default_rate: int = DEFAULT_DELIVERY_FEE,
        default_threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD,
    ):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
            default_rate: Fee in cents used when no rate is stored
            default_threshold: Threshold in cents used when no rate is stored
        """
        self.session = session
        self.default_policy = ShippingPolicy(rate=default_rate, free_shipping_threshold=default_threshold)

    async def get_policy(self) -> ShippingPolicy:
        """
        Get the current shipping policy in cents.

        The read runs in a savepoint; a failure rolls back only the savepoint.
        """
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(
                    select(ShippingRateModel).order_by(ShippingRateModel.id.desc()).limit(1)
                )
                model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error loading shipping rate, using defaults: {e}")
            return self.default_policy

        if model is None:
            logger.info("No shipping rate configured, using defaults")
            return self.default_policy

        return ShippingPolicy.from_euros(
            rate=cast(Decimal | None, model.rate),
            free_shipping_threshold=cast(Decimal | None, model.free_shipping_threshold),
            default_rate=self.default_policy.rate,
            default_threshold=self.default_policy.free_shipping_threshold,
        )
