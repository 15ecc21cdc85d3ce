"""
Coupon Value Object

A basket-level discount: either a flat amount off (cents) or a percentage
of the pre-discount subtotal.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain import Percentage, StatusEnum, ValueObject, to_decimal


class CouponKind(StatusEnum):
    """How a coupon reduces the basket."""

    AMOUNT_OFF = "amount_off"
    PERCENT_OFF = "percent_off"


@dataclass(frozen=True)
class Coupon(ValueObject):
    """
    Coupon attached to a basket.

    Only the field matching ``kind`` is meaningful.

    Example:
        ```python
        coupon = Coupon(kind=CouponKind.PERCENT_OFF, name="WELCOME10", percent_off=Decimal("10"))
        coupon.discount_for(10000)  # 1000
        ```
    """

    kind: CouponKind
    name: str = ""
    promotion_code: str = ""
    coupon_id: str = ""
    amount_off: int | None = None
    percent_off: Decimal | None = None

    def _validate(self) -> None:
        if self.kind == CouponKind.AMOUNT_OFF and self.amount_off is None:
            raise ValueError("Amount-off coupon requires amount_off")
        if self.kind == CouponKind.PERCENT_OFF:
            if self.percent_off is None:
                raise ValueError("Percent-off coupon requires percent_off")
            if not isinstance(self.percent_off, Decimal):
                object.__setattr__(self, "percent_off", to_decimal(self.percent_off))

    def discount_for(self, subtotal: int) -> int:
        """
        Coupon discount in cents for a pre-discount subtotal.

        Amount-off coupons are flat and not scaled by the subtotal.
        """
        if self.kind == CouponKind.AMOUNT_OFF:
            return max(0, self.amount_off or 0)
        return Percentage.clamped(self.percent_off or 0).of(subtotal)

    @classmethod
    def from_fields(
        cls,
        name: str,
        amount_off: int | None = None,
        percent_off: int | float | str | Decimal | None = None,
        promotion_code: str = "",
        coupon_id: str = "",
    ) -> "Coupon":
        """
        Build a coupon from nullable storage columns.

        A non-zero amount off wins; otherwise the percentage is used.
        """
        if amount_off:
            return cls(
                kind=CouponKind.AMOUNT_OFF,
                name=name,
                promotion_code=promotion_code,
                coupon_id=coupon_id,
                amount_off=amount_off,
            )
        if percent_off is not None:
            return cls(
                kind=CouponKind.PERCENT_OFF,
                name=name,
                promotion_code=promotion_code,
                coupon_id=coupon_id,
                percent_off=to_decimal(percent_off),
            )
        raise ValueError(f"Coupon {name!r} has neither amount_off nor percent_off")
