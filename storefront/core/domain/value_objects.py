"""
Base Value Object Classes

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.

Money is always held as an integer amount of the smallest currency unit
(cents). Conversion to major units happens only at data or display boundaries.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self

CENTS_PER_UNIT = 100


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    """Convert a number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal) -> int:
    """Round a Decimal to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), ROUND_HALF_UP))


@dataclass(frozen=True)
class ValueObject:
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object in integer cents.

    Example:
        ```python
        price = Money(cents=4999)
        line = price.multiply(3)          # Money(cents=14997)
        Money.from_euros("12.345").cents  # 1235
        ```
    """

    cents: int
    currency: str = "EUR"

    def _validate(self) -> None:
        """Validate money constraints."""
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise ValueError(f"Money must be expressed in integer cents, got {self.cents!r}")
        if self.cents < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")

    def add(self, other: "Money") -> "Money":
        """Add two Money values (must be same currency)."""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(cents=self.cents + other.cents, currency=self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Subtract Money, flooring the result at zero."""
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {other.currency} from {self.currency}")
        return Money(cents=max(0, self.cents - other.cents), currency=self.currency)

    def multiply(self, quantity: int) -> "Money":
        """Multiply by an integer quantity."""
        return Money(cents=self.cents * quantity, currency=self.currency)

    def to_euros(self) -> Decimal:
        """Major-unit amount with two decimal places, for display only."""
        return (Decimal(self.cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.cents == 0

    def __str__(self) -> str:
        return f"{self.currency} {self.to_euros():,.2f}"

    def __repr__(self) -> str:
        return f"Money(cents={self.cents}, currency='{self.currency}')"

    @classmethod
    def zero(cls, currency: str = "EUR") -> "Money":
        """Create a zero Money value."""
        return cls(cents=0, currency=currency)

    @classmethod
    def from_euros(cls, amount: int | float | str | Decimal, currency: str = "EUR") -> "Money":
        """Create Money from a major-unit amount (with half-up rounding to cents)."""
        return cls(cents=round_half_up(to_decimal(amount) * CENTS_PER_UNIT), currency=currency)


@dataclass(frozen=True)
class Percentage(ValueObject):
    """
    Percentage value object.

    Represents a percentage value between 0 and 100.
    """

    value: Decimal

    def _validate(self) -> None:
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", to_decimal(self.value))
        if self.value < 0 or self.value > 100:
            raise ValueError("Percentage must be between 0 and 100")

    def of(self, cents: int) -> int:
        """Portion of an amount, rounded half up to whole cents."""
        return round_half_up(Decimal(cents) * self.value / 100)

    def remaining_of(self, cents: int) -> int:
        """What is left of an amount after taking this percentage off."""
        return round_half_up(Decimal(cents) * (100 - self.value) / 100)

    def __str__(self) -> str:
        return f"{self.value}%"

    @classmethod
    def clamped(cls, value: int | float | str | Decimal) -> "Percentage":
        """Build a percentage, clamping out-of-range input into [0, 100]."""
        return cls(value=min(Decimal("100"), max(Decimal("0"), to_decimal(value))))


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")
