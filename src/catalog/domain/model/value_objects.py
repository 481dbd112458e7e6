"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from catalog.domain.exceptions import (
    CurrencyMismatch,
    InvalidAmount,
    InvalidPriceFormat,
    InvalidQuantity,
    UnsupportedCurrency,
)

SUPPORTED_CURRENCIES: tuple[str, ...] = ("USD", "EUR", "INR", "RUB")
MAX_PRICE = Decimal("999999.99")
MAX_QUANTITY = 1_000_000

_CENT = Decimal("0.01")


def _to_decimal(value: Any) -> Decimal | None:
    """Coerce an int, float or Decimal to Decimal; None if it is not a finite number.

    Floats go through ``str()`` so 99.999 becomes Decimal("99.999") rather
    than its binary approximation.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        return None
    return result if result.is_finite() else None


@dataclass(frozen=True)
class Price:
    """Monetary amount with currency.

    The amount is always a Decimal rounded to cents (half away from zero),
    strictly positive and at most ``MAX_PRICE``. Arithmetic returns new
    instances and re-runs the same validation.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount)
        if amount is None:
            raise InvalidAmount(self.amount, "Amount must be a finite number")
        if amount <= 0:
            raise InvalidAmount(self.amount)
        if amount > MAX_PRICE:
            raise InvalidAmount(self.amount, "Amount exceeds maximum allowed value")

        currency = self._normalize_currency(self.currency)

        rounded = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        if rounded <= 0:
            raise InvalidAmount(self.amount, "Amount rounds to zero")

        object.__setattr__(self, "amount", rounded)
        object.__setattr__(self, "currency", currency)

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Price) -> Price:
        if not isinstance(other, Price):
            return NotImplemented
        self._assert_same_currency(other)
        return Price(self.amount + other.amount, self.currency)

    def __sub__(self, other: Price) -> Price:
        if not isinstance(other, Price):
            return NotImplemented
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result <= 0:
            raise InvalidAmount(result, "Subtraction must leave a positive amount")
        return Price(result, self.currency)

    def __mul__(self, factor: int | float | Decimal) -> Price:
        multiplier = _to_decimal(factor) if not isinstance(factor, str) else None
        if multiplier is None or multiplier < 0:
            raise InvalidAmount(factor, "Invalid multiplication factor")
        return Price(self.amount * multiplier, self.currency)

    def __lt__(self, other: Price) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Price) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Price) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Price) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display / serialization ----------------------------------------------

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"

    def to_dict(self) -> dict[str, Any]:
        return {"amount": float(self.amount), "currency": self.currency}

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Price) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatch(self.currency, other.currency)

    @staticmethod
    def _normalize_currency(currency: Any) -> str:
        if not currency or not isinstance(currency, str):
            raise UnsupportedCurrency(currency)
        upper = currency.strip().upper()
        if upper not in SUPPORTED_CURRENCIES:
            raise UnsupportedCurrency(currency)
        return upper

    # --- Factories ------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> Price:
        """Inverse of ``str(price)``: ``"USD 10.50"`` -> Price."""
        if not isinstance(text, str):
            raise InvalidPriceFormat(text)
        parts = text.split()
        if len(parts) != 2:
            raise InvalidPriceFormat(text)

        currency, amount_text = parts
        try:
            amount = Decimal(amount_text)
        except InvalidOperation as exc:
            raise InvalidPriceFormat(text) from exc
        if not amount.is_finite():
            raise InvalidPriceFormat(text)

        return cls(amount, currency)

    @staticmethod
    def supported_currencies() -> tuple[str, ...]:
        return SUPPORTED_CURRENCIES


@dataclass(frozen=True)
class Quantity:
    """A non-negative integer count, capped at ``MAX_QUANTITY``.

    Integral floats such as ``5.0`` are accepted and stored as ``int``.
    """

    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self._to_count(self.value))

    @staticmethod
    def _to_count(value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            count = value
        elif isinstance(value, (float, Decimal)):
            number = _to_decimal(value)
            if number is None or number != number.to_integral_value():
                raise InvalidQuantity(value, "Quantity must be an integer")
            count = int(number)
        else:
            raise InvalidQuantity(value, "Quantity must be an integer")

        if count < 0:
            raise InvalidQuantity(value)
        if count > MAX_QUANTITY:
            raise InvalidQuantity(value, f"Quantity cannot exceed {MAX_QUANTITY}")
        return count

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.value + other.value)

    def __sub__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        result = self.value - other.value
        if result < 0:
            raise InvalidQuantity(result)
        return Quantity(result)

    def __mul__(self, factor: int | float | Decimal) -> Quantity:
        multiplier = _to_decimal(factor) if not isinstance(factor, str) else None
        if multiplier is None or multiplier < 0:
            raise InvalidQuantity(factor, "Invalid multiplication factor")
        result = self.value * multiplier
        if result != result.to_integral_value():
            raise InvalidQuantity(result, "Quantity must be an integer")
        return Quantity(int(result))

    def __lt__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value >= other.value

    # --- Predicates -----------------------------------------------------------

    def is_sufficient_for(self, required: Quantity) -> bool:
        return self.value >= required.value

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        return self.value > 0

    def __str__(self) -> str:
        return str(self.value)
