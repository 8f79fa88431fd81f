"""Document totals: the only place subtotal, tax and grand total are derived."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Protocol

from billing.utils.money import ROUNDING, Money, Numeric, sum_money, to_decimal

_HUNDRED = Decimal(100)

# Stored scale of documents.tax_rate and line_items.quantity. Totals are
# computed from values already at this scale so they can be re-derived from
# the stored rows.
TAX_RATE_PLACES = 3
QUANTITY_PLACES = 4


class PricedLine(Protocol):
    unit_price: Money
    quantity: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Money
    tax_total: Money
    grand_total: Money


def _quantize(value: Numeric, places: int) -> Decimal:
    return to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUNDING)


def normalize_tax_rate(tax_rate: Numeric) -> Decimal:
    return _quantize(tax_rate, TAX_RATE_PLACES)


def normalize_quantity(quantity: Numeric) -> Decimal:
    return _quantize(quantity, QUANTITY_PLACES)


def calculate_line_total(unit_price: Money, quantity: Numeric) -> Money:
    """Price times quantity, rounded to a whole minor unit for this line alone."""
    return unit_price.multiply(quantity)


def calculate_totals(items: Iterable[PricedLine], tax_rate: Numeric) -> DocumentTotals:
    """
    Compute totals from line items and a tax percentage.

    Each line is rounded before it is added to the subtotal, so the subtotal
    does not depend on item order. Tax is rounded once, on the subtotal.
    """
    subtotal = sum_money(calculate_line_total(item.unit_price, item.quantity) for item in items)

    tax_total = subtotal.multiply(to_decimal(tax_rate) / _HUNDRED)
    return DocumentTotals(
        subtotal=subtotal,
        tax_total=tax_total,
        grand_total=subtotal + tax_total,
    )
