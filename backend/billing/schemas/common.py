from decimal import Decimal
from typing import Annotated

from pydantic import BeforeValidator

from billing.utils.money import Money


def _money_as_decimal(value):
    if isinstance(value, Money):
        return value.to_decimal()
    return value


# Outbound amount: Money on the ORM side, two-place Decimal on the wire
MoneyAmount = Annotated[Decimal, BeforeValidator(_money_as_decimal)]
