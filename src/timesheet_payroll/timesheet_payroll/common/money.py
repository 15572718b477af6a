from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_money(value: Any, *, absolute: bool = False) -> Decimal:
    """Coerce any input into a non-negative Decimal.

    ``None``, NaN, infinities, unparsable values and negatives become 0 so a
    payslip never carries a malformed figure. With ``absolute`` a negative
    amount is taken by magnitude instead.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    if absolute:
        return abs(amount)
    return amount if amount >= 0 else ZERO


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
