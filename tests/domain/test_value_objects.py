"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import (
    MAX_QUANTITY,
    Money,
    Quantity,
    ShippingAddress,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_zero_is_allowed(self):
        assert Money.zero().amount == Decimal("0")

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("twelve")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5  # type: ignore[operator]

    def test_scaled_rounds_half_up_to_cents(self):
        assert Money.of("0.05").scaled(Decimal("0.10")).amount == Decimal("0.01")
        assert Money.of("33.33").scaled(Decimal("0.10")).amount == Decimal("3.33")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_and_plain_formatting(self):
        assert str(Money.of("9.5")) == "$9.50"
        assert Money.of("9.5").to_plain() == "9.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10")
        assert Money.of("10") <= Money.of("10")

    @pytest.mark.parametrize("raw", ["Infinity", "-Infinity", "NaN", "sNaN"])
    def test_non_finite_amount_rejected(self, raw):
        with pytest.raises(ValidationError):
            Money.of(raw)

    def test_amount_beyond_storage_rejected(self):
        assert Money.of("9999999999.99").to_plain() == "9999999999.99"
        with pytest.raises(ValidationError, match="cannot exceed"):
            Money.of("10000000000.00")
        with pytest.raises(ValidationError, match="cannot exceed"):
            Money.of("1E+30")

    def test_multiplication_past_the_limit_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Money.of("5000000000.00") * 3


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_addition(self):
        assert (Quantity(2) + Quantity(3)).value == 5

    def test_upper_bound(self):
        assert Quantity(MAX_QUANTITY).value == MAX_QUANTITY
        with pytest.raises(ValidationError, match="cannot exceed"):
            Quantity(10**20)


# ── ShippingAddress ──────────────────────────────────────────────────────────


class TestShippingAddress:

    def test_blank_field_rejected(self):
        with pytest.raises(ValidationError, match="Shipping city is required"):
            ShippingAddress("Ann", "1 Main St", "  ", "CA", "90210", "US")
