"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the boundaries (HTTP, CLI) can catch them uniformly. Each class carries
an ``ErrorKind`` that tells the boundary which category of client error it
is, and a numeric ``code`` for the response body.

Infrastructure failures (I/O errors, a corrupted store) are
*not* DomainExceptions and propagate untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    BAD_INPUT = "BAD_INPUT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.BAD_INPUT
    code: int = 4000


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = 4001


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND
    code = 4040


class ConflictError(DomainException):
    """The request clashes with the current state of the catalog."""

    kind = ErrorKind.CONFLICT
    code = 4090


# --- Value objects -----------------------------------------------------------


class InvalidAmount(ValidationError):
    code = 4003

    def __init__(self, amount: Any, reason: str = "Price must be positive") -> None:
        self.amount = amount
        super().__init__(f"Invalid price: {amount}. {reason}.")


class InvalidQuantity(ValidationError):
    code = 4004

    def __init__(self, value: Any, reason: str = "Quantity must be non-negative") -> None:
        self.value = value
        super().__init__(f"Invalid quantity: {value}. {reason}.")


class UnsupportedCurrency(ValidationError):
    code = 4005

    def __init__(self, currency: Any) -> None:
        self.currency = currency
        super().__init__(f"Unsupported currency: {currency!r}")


class CurrencyMismatch(ValidationError):
    code = 4006

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Currency mismatch: {left} vs {right}")


class InvalidPriceFormat(ValidationError):
    code = 4007

    def __init__(self, text: Any) -> None:
        self.text = text
        super().__init__(
            f'Invalid price format: {text!r}. Expected "CURRENCY AMOUNT"'
        )


# --- Product -----------------------------------------------------------------


class InsufficientStock(ValidationError):
    code = 4008

    def __init__(self, available: int, requested: int) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock (need {requested}, have {available} available)"
        )


class ProductNotFound(EntityNotFoundError):
    code = 4041

    def __init__(self, identifier: str, identifier_type: str = "id") -> None:
        self.identifier = identifier
        super().__init__(f"Product with {identifier_type} '{identifier}' not found")


class ProductAlreadyExists(ConflictError):
    code = 4091

    def __init__(self, sku: str) -> None:
        self.sku = sku
        super().__init__(f"Product with SKU '{sku}' already exists")


class ProductOperationFailed(ConflictError):
    """The store reported no match after the entity-level checks passed.

    Usually means the record was removed or modified concurrently.
    """

    code = 4092

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Cannot {operation} product: {reason}")
