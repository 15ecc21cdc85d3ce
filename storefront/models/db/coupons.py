"""
Coupon models
"""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, Numeric, String, func

from .base import Base, TimestampMixin


class Coupon(Base, TimestampMixin):
    """Cupones canjeables por código de promoción (sin distinguir mayúsculas)."""

    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    promotion_code = Column(String(100), nullable=False)
    coupon_id = Column(String(100), nullable=False, default="")

    # Exactly one of these is meaningful
    amount_off = Column(Integer)
    percent_off = Column(Numeric(5, 2))

    active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime(timezone=True))

    __table_args__ = (
        # Lookups compare upper(promotion_code)
        Index("uq_coupons_promotion_code_upper", func.upper(promotion_code), unique=True),
    )

    def __repr__(self):
        return f"<Coupon(code='{self.promotion_code}', amount_off={self.amount_off}, percent_off={self.percent_off})>"
