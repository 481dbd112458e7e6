"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from catalog.domain.exceptions import (
    CurrencyMismatch,
    InvalidAmount,
    InvalidPriceFormat,
    InvalidQuantity,
    UnsupportedCurrency,
    ValidationError,
)
from catalog.domain.model.value_objects import Price, Quantity


# ── Price ────────────────────────────────────────────────────────────────────


class TestPriceCreation:

    def test_default_currency(self):
        p = Price(Decimal("10.50"))
        assert p.amount == Decimal("10.50")
        assert p.currency == "USD"

    def test_custom_currency(self):
        assert Price(100, "EUR").currency == "EUR"

    def test_currency_is_normalized_to_uppercase(self):
        assert Price(100, "inr").currency == "INR"

    def test_accepts_float_int_and_decimal(self):
        assert Price(19.99).amount == Decimal("19.99")
        assert Price(20).amount == Decimal("20.00")
        assert Price(Decimal("7.5")).amount == Decimal("7.50")

    def test_rounds_to_two_decimals(self):
        assert Price(99.999).amount == Decimal("100.00")
        assert Price(10.555).amount == Decimal("10.56")
        assert Price(10.554).amount == Decimal("10.55")

    def test_maximum_is_allowed(self):
        assert Price(999999.99).amount == Decimal("999999.99")

    @pytest.mark.parametrize(
        "amount",
        [0, -1, -0.01, 1_000_000, 999999.991, float("nan"), float("inf"), "abc", "7.5", None, True],
    )
    def test_invalid_amount_rejected(self, amount):
        with pytest.raises(InvalidAmount):
            Price(amount)

    def test_amount_rounding_to_zero_rejected(self):
        with pytest.raises(InvalidAmount, match="rounds to zero"):
            Price(0.004)

    @pytest.mark.parametrize("currency", ["GBP", "usdx", "", None])
    def test_unsupported_currency_rejected(self, currency):
        with pytest.raises(UnsupportedCurrency):
            Price(10, currency)

    def test_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            Price(-5)

    def test_is_immutable(self):
        p = Price(10)
        with pytest.raises(AttributeError):
            p.amount = Decimal("20")  # type: ignore[misc]


class TestPriceEquality:

    def test_equal_prices(self):
        assert Price(100, "USD") == Price(100.00, "usd")

    def test_different_amounts(self):
        assert Price(100) != Price(200)

    def test_different_currencies(self):
        assert Price(100, "USD") != Price(100, "EUR")

    def test_usable_as_dict_key(self):
        assert len({Price(5), Price(5.0), Price(Decimal("5.00"))}) == 1


class TestPriceArithmetic:

    def test_addition(self):
        assert Price(100, "USD") + Price(50, "USD") == Price(150, "USD")

    def test_addition_currency_mismatch(self):
        with pytest.raises(CurrencyMismatch, match="USD vs EUR"):
            Price(100, "USD") + Price(50, "EUR")

    def test_addition_above_maximum_rejected(self):
        with pytest.raises(InvalidAmount):
            Price(999999) + Price(1)

    def test_subtraction(self):
        assert Price(100) - Price(30.5) == Price(69.5)

    def test_subtraction_to_zero_rejected(self):
        with pytest.raises(InvalidAmount):
            Price(10) - Price(10)

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(InvalidAmount):
            Price(5) - Price(10)

    def test_subtraction_currency_mismatch(self):
        with pytest.raises(CurrencyMismatch):
            Price(100, "RUB") - Price(1, "INR")

    def test_multiplication(self):
        assert Price(7.5) * 3 == Price(22.5)
        assert Price(10) * 1.5 == Price(15)
        assert Price(10) * Decimal("0.333") == Price(3.33)

    def test_multiplication_keeps_currency(self):
        assert (Price(10, "EUR") * 2).currency == "EUR"

    @pytest.mark.parametrize("factor", [-1, float("nan"), float("inf"), "2", True])
    def test_invalid_factor_rejected(self, factor):
        with pytest.raises(InvalidAmount):
            Price(10) * factor

    def test_multiplication_by_zero_rejected(self):
        with pytest.raises(InvalidAmount):
            Price(10) * 0


class TestPriceComparison:

    def test_comparison_operators(self):
        assert Price(5) < Price(10)
        assert Price(10) > Price(5)
        assert Price(10) >= Price(10)
        assert Price(10) <= Price(10)
        assert not Price(10) > Price(10)

    def test_comparison_currency_mismatch(self):
        with pytest.raises(CurrencyMismatch):
            Price(5, "USD") < Price(10, "EUR")
        with pytest.raises(CurrencyMismatch):
            Price(5, "USD") > Price(10, "EUR")

    @pytest.mark.parametrize("other", [5, Decimal("5"), "USD 5.00", None])
    def test_ordering_against_non_price_is_type_error(self, other):
        with pytest.raises(TypeError):
            Price(1) < other
        with pytest.raises(TypeError):
            Price(1) >= other


class TestPriceSerialization:

    def test_str_is_canonical(self):
        assert str(Price(15)) == "USD 15.00"
        assert str(Price(9.5, "eur")) == "EUR 9.50"

    def test_parse(self):
        assert Price.parse("EUR 12.34") == Price(12.34, "EUR")

    def test_parse_tolerates_extra_whitespace(self):
        assert Price.parse("  usd    5 ") == Price(5, "USD")

    @pytest.mark.parametrize(
        "price", [Price(0.01), Price(99.999), Price(123456.78, "RUB"), Price(1, "inr")]
    )
    def test_parse_inverts_str(self, price):
        assert Price.parse(str(price)) == price

    @pytest.mark.parametrize("text", ["", "USD", "USD 10 extra", "USD ten", "USD NaN", "10.00"])
    def test_parse_rejects_bad_format(self, text):
        with pytest.raises(InvalidPriceFormat):
            Price.parse(text)

    def test_parse_still_validates_currency_and_amount(self):
        with pytest.raises(UnsupportedCurrency):
            Price.parse("GBP 10.00")
        with pytest.raises(InvalidAmount):
            Price.parse("USD -1")

    def test_to_dict(self):
        assert Price(999.99, "usd").to_dict() == {"amount": 999.99, "currency": "USD"}

    def test_supported_currencies(self):
        assert set(Price.supported_currencies()) == {"USD", "EUR", "INR", "RUB"}


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_allowed(self):
        assert Quantity(0).is_zero()

    def test_maximum_allowed(self):
        assert Quantity(1_000_000).value == 1_000_000

    def test_integral_float_normalized(self):
        q = Quantity(5.0)
        assert q.value == 5
        assert isinstance(q.value, int)

    @pytest.mark.parametrize(
        "value", [-1, 10.5, 1_000_001, float("nan"), float("inf"), "3", None, True]
    )
    def test_invalid_value_rejected(self, value):
        with pytest.raises(InvalidQuantity):
            Quantity(value)

    def test_equality(self):
        assert Quantity(5) == Quantity(5)
        assert Quantity(5) != Quantity(6)

    def test_comparison(self):
        assert Quantity(10) > Quantity(5)
        assert Quantity(5) < Quantity(10)
        assert Quantity(5) <= Quantity(5)

    def test_ordering_against_plain_int_is_type_error(self):
        with pytest.raises(TypeError):
            Quantity(5) > 3
        with pytest.raises(TypeError):
            Quantity(5) <= 3

    def test_addition(self):
        assert Quantity(10) + Quantity(5) == Quantity(15)
        assert Quantity(10) + Quantity(0) == Quantity(10)

    def test_addition_above_maximum_rejected(self):
        with pytest.raises(InvalidQuantity):
            Quantity(1_000_000) + Quantity(1)

    def test_subtraction(self):
        assert Quantity(10) - Quantity(3) == Quantity(7)
        assert Quantity(10) - Quantity(10) == Quantity(0)

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(InvalidQuantity):
            Quantity(5) - Quantity(10)

    def test_multiplication(self):
        assert Quantity(4) * 3 == Quantity(12)
        assert Quantity(4) * 0.5 == Quantity(2)
        assert Quantity(4) * 0 == Quantity(0)

    def test_multiplication_with_fractional_result_rejected(self):
        with pytest.raises(InvalidQuantity, match="integer"):
            Quantity(3) * 0.5

    @pytest.mark.parametrize("factor", [-2, float("nan"), "2", False])
    def test_invalid_factor_rejected(self, factor):
        with pytest.raises(InvalidQuantity):
            Quantity(3) * factor

    def test_is_sufficient_for(self):
        assert Quantity(10).is_sufficient_for(Quantity(10))
        assert not Quantity(9).is_sufficient_for(Quantity(10))

    def test_predicates(self):
        assert Quantity(0).is_zero()
        assert not Quantity(0).is_positive()
        assert Quantity(1).is_positive()
        assert not Quantity(1).is_zero()

    def test_str(self):
        assert str(Quantity(7)) == "7"
