"""
Fixed-point currency value.

Amounts are held as an integer count of minor units (cents). Decimal
conversion happens only at the boundary (request parsing, response
serialization), and every rounding step uses ROUND_HALF_UP, which in the
decimal module rounds halves away from zero: 0.005 -> 0.01, -0.005 -> -0.01.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Union

MINOR_UNITS_PER_MAJOR = 100
ROUNDING = ROUND_HALF_UP

_ONE = Decimal(1)

Numeric = Union[int, str, float, Decimal]


def to_decimal(value: Numeric) -> Decimal:
    """Convert an external number to Decimal without going through binary float math."""
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric amount")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # repr gives the shortest string that round-trips, so 1.005 stays 1.005
        result = Decimal(repr(value))
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"Not a decimal number: {value!r}") from e
    else:
        raise TypeError(f"Unsupported numeric type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def round_to_minor_units(value: Decimal) -> int:
    return int(value.quantize(_ONE, rounding=ROUNDING))


@total_ordering
class Money:
    """Immutable amount in minor currency units."""

    __slots__ = ("_minor_units",)

    def __init__(self, minor_units: int = 0):
        if isinstance(minor_units, bool) or not isinstance(minor_units, int):
            raise TypeError(f"Money requires an integer count of minor units, got {minor_units!r}")
        self._minor_units = minor_units

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    @classmethod
    def from_minor_units(cls, minor_units: int) -> "Money":
        return cls(minor_units)

    @classmethod
    def from_decimal(cls, amount: Numeric) -> "Money":
        """Parse a major-unit amount (e.g. ``"230.00"``), rounding to the nearest minor unit."""
        return cls(round_to_minor_units(to_decimal(amount) * MINOR_UNITS_PER_MAJOR))

    @property
    def minor_units(self) -> int:
        return self._minor_units

    def add(self, other: "Money") -> "Money":
        return Money(self._minor_units + _require_money(other)._minor_units)

    def subtract(self, other: "Money") -> "Money":
        # May go negative; callers clamp where the domain needs it
        return Money(self._minor_units - _require_money(other)._minor_units)

    def multiply(self, factor: Numeric) -> "Money":
        """Scale by a quantity or rate; the product is rounded once to a whole minor unit."""
        return Money(round_to_minor_units(Decimal(self._minor_units) * to_decimal(factor)))

    def clamp_non_negative(self) -> "Money":
        return self if self._minor_units >= 0 else Money.zero()

    def to_decimal(self) -> Decimal:
        return Decimal(self._minor_units).scaleb(-2)

    def is_zero(self) -> bool:
        return self._minor_units == 0

    __add__ = add
    __sub__ = subtract

    def __mul__(self, factor: Numeric) -> "Money":
        if isinstance(factor, Money):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Money":
        return Money(-self._minor_units)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._minor_units == other._minor_units

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._minor_units < other._minor_units

    def __hash__(self) -> int:
        return hash(self._minor_units)

    def __bool__(self) -> bool:
        return self._minor_units != 0

    def __repr__(self) -> str:
        return f"Money({self.to_decimal()})"

    def __str__(self) -> str:
        return str(self.to_decimal())


def _require_money(value) -> Money:
    if not isinstance(value, Money):
        raise TypeError(f"Expected Money, got {type(value).__name__}")
    return value


def sum_money(amounts) -> Money:
    total = Money.zero()
    for amount in amounts:
        total = total + amount
    return total
