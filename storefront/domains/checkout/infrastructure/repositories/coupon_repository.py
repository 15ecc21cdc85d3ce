"""
Coupon Repository Implementation

SQLAlchemy implementation of ICouponRepository.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import cast

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domains.checkout.application.ports import ICouponRepository
from storefront.domains.checkout.domain.value_objects import Coupon
from storefront.models.db.coupons import Coupon as CouponModel

logger = logging.getLogger(__name__)


class SQLAlchemyCouponRepository(ICouponRepository):
    """SQLAlchemy implementation of coupon lookup."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_code(self, code: str) -> Coupon | None:
        """
        Get an active, unexpired coupon by promotion code.

        Codes are matched case-insensitively.
        """
        now = datetime.now(UTC)
        result = await self.session.execute(
            select(CouponModel).where(
                func.upper(CouponModel.promotion_code) == code.upper(),
                CouponModel.active.is_(True),
                or_(CouponModel.expires_at.is_(None), CouponModel.expires_at > now),
            )
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None

        try:
            return Coupon.from_fields(
                name=cast(str, model.name),
                amount_off=cast(int | None, model.amount_off),
                percent_off=cast(Decimal | None, model.percent_off),
                promotion_code=cast(str, model.promotion_code),
                coupon_id=cast(str | None, model.coupon_id) or "",
            )
        except ValueError as e:
            logger.warning(f"Coupon {code} is misconfigured and cannot be applied: {e}")
            return None
