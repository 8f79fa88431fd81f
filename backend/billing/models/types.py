from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

from billing.utils.money import Money


class MoneyType(TypeDecorator):
    """Stores Money as an integer count of minor units."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, Money):
            return value.minor_units
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise TypeError(f"MoneyType expects Money, got {type(value).__name__}")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Money(int(value))
