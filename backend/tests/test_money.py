from decimal import Decimal

import pytest

from billing.utils.money import Money, sum_money, to_decimal


def test_from_decimal_converts_major_units_to_cents():
    assert Money.from_decimal("230.00").minor_units == 23000
    assert Money.from_decimal(Decimal("0.01")).minor_units == 1
    assert Money.from_decimal(7).minor_units == 700


def test_from_decimal_rounds_half_away_from_zero():
    """Halves round away from zero, in both directions"""
    assert Money.from_decimal("0.005").minor_units == 1
    assert Money.from_decimal("0.015").minor_units == 2
    assert Money.from_decimal("0.004").minor_units == 0
    assert Money.from_decimal("-0.005").minor_units == -1
    assert Money.from_decimal("-0.015").minor_units == -2


def test_from_decimal_float_uses_shortest_repr():
    # Binary 1.005 is 1.00499999..., read as written it is a half and rounds up
    assert Money.from_decimal(1.005).minor_units == 101
    assert Money.from_decimal(0.1).add(Money.from_decimal(0.2)) == Money.from_decimal("0.30")


def test_multiply_rounds_once_after_scaling():
    price = Money.from_decimal("33.33")
    assert price.multiply(3).minor_units == 9999
    assert price.multiply(Decimal("0.5")).minor_units == 1667  # 1666.5 -> 1667
    assert Money(1).multiply(Decimal("0.5")).minor_units == 1
    assert Money(-1).multiply(Decimal("0.5")).minor_units == -1


def test_subtract_may_go_negative_and_clamp_restores_zero():
    difference = Money.from_decimal("100.00") - Money.from_decimal("130.00")
    assert difference.minor_units == -3000
    assert difference.clamp_non_negative() == Money.zero()
    assert Money(5).clamp_non_negative() == Money(5)


def test_to_decimal_has_two_places():
    assert Money(23000).to_decimal() == Decimal("230.00")
    assert str(Money(23000).to_decimal()) == "230.00"
    assert str(Money(-5)) == "-0.05"
    assert str(Money.zero()) == "0.00"


def test_money_requires_integer_minor_units():
    with pytest.raises(TypeError):
        Money(1.5)
    with pytest.raises(TypeError):
        Money(True)
    with pytest.raises(TypeError):
        Money(1) + 1


def test_to_decimal_rejects_non_finite_and_garbage():
    with pytest.raises(ValueError):
        to_decimal("abc")
    with pytest.raises(ValueError):
        to_decimal(float("nan"))
    with pytest.raises(ValueError):
        Money.from_decimal("Infinity")


def test_ordering_and_sum():
    amounts = [Money(300), Money(100), Money(200)]
    assert sorted(amounts) == [Money(100), Money(200), Money(300)]
    assert sum_money(amounts) == Money(600)
    assert Money(1) > Money.zero()
    assert not Money.zero()
