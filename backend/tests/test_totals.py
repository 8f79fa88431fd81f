from collections import namedtuple
from decimal import Decimal
import itertools
import random

from billing.utils.money import Money
from billing.utils.totals import (
    calculate_line_total,
    calculate_totals,
    normalize_quantity,
    normalize_tax_rate,
)

Line = namedtuple("Line", ["unit_price", "quantity"])


def test_scenario_a_totals():
    """2 x 50.00 + 1 x 100.00 at 15% tax"""
    items = [
        Line(Money.from_decimal("50.00"), Decimal("2")),
        Line(Money.from_decimal("100.00"), Decimal("1")),
    ]
    totals = calculate_totals(items, Decimal("15"))

    assert totals.subtotal == Money.from_decimal("200.00")
    assert totals.tax_total == Money.from_decimal("30.00")
    assert totals.grand_total == Money.from_decimal("230.00")


def test_empty_items_give_zero_totals():
    totals = calculate_totals([], Decimal("15"))
    assert totals.subtotal.is_zero()
    assert totals.tax_total.is_zero()
    assert totals.grand_total.is_zero()


def test_each_line_is_rounded_before_summing():
    # 0.333 x 10.05 = 3.34665 -> 3.35 per line; two lines = 6.70 (not round(6.6933) = 6.69)
    items = [Line(Money.from_decimal("10.05"), Decimal("0.333"))] * 2
    assert calculate_line_total(Money.from_decimal("10.05"), Decimal("0.333")) == Money(335)
    assert calculate_totals(items, 0).subtotal == Money(670)


def test_tax_rounds_on_subtotal():
    items = [Line(Money.from_decimal("9.99"), Decimal("1"))]
    totals = calculate_totals(items, Decimal("7.5"))
    # 999 * 0.075 = 74.925 -> 75
    assert totals.tax_total == Money(75)
    assert totals.grand_total == Money(1074)


def test_grand_total_is_exact_sum_for_random_items():
    rng = random.Random(20261017)
    for _ in range(200):
        items = [
            Line(Money(rng.randint(0, 1_000_000)), Decimal(rng.randint(0, 5000)) / Decimal(1000))
            for _ in range(rng.randint(0, 8))
        ]
        rate = Decimal(rng.randint(0, 3000)) / Decimal(100)
        totals = calculate_totals(items, rate)
        assert totals.grand_total.minor_units == totals.subtotal.minor_units + totals.tax_total.minor_units


def test_subtotal_does_not_depend_on_item_order():
    items = [
        Line(Money.from_decimal("0.07"), Decimal("0.5")),
        Line(Money.from_decimal("19.99"), Decimal("1.25")),
        Line(Money.from_decimal("3.33"), Decimal("3")),
    ]
    subtotals = {calculate_totals(order, 15).subtotal for order in itertools.permutations(items)}
    assert len(subtotals) == 1


def test_rate_and_quantity_normalize_to_stored_scale():
    assert normalize_tax_rate("15.1234") == Decimal("15.123")
    assert normalize_tax_rate(Decimal("7.1255")) == Decimal("7.126")
    assert normalize_tax_rate(15) == Decimal("15.000")
    assert normalize_quantity("1.00005") == Decimal("1.0001")
    assert normalize_quantity(2.5) == Decimal("2.5000")
