"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from storefront.core.domain.entities import AggregateRoot, Entity
from storefront.core.domain.exceptions import (
    BusinessRuleViolationException,
    DomainException,
    EntityNotFoundException,
    InsufficientStockException,
    InvalidCouponException,
    InvalidOperationException,
    PaymentException,
    ValidationException,
)
from storefront.core.domain.value_objects import (
    CENTS_PER_UNIT,
    Money,
    Percentage,
    StatusEnum,
    ValueObject,
    round_half_up,
    to_decimal,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    # Value Objects
    "ValueObject",
    "Money",
    "Percentage",
    "StatusEnum",
    "CENTS_PER_UNIT",
    "round_half_up",
    "to_decimal",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "BusinessRuleViolationException",
    "InvalidCouponException",
    "InsufficientStockException",
    "InvalidOperationException",
    "PaymentException",
]
