"""Decimal money helpers.

Amounts travel through the document store as decimal text ("10.00") and are
only ever combined as ``Decimal`` values, so line totals never pick up binary
float drift.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    """Coerce a stored or incoming amount to a two-place ``Decimal``.

    Floats are routed through ``str`` first so ``10.1`` becomes ``10.10``
    rather than its binary expansion.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Not a monetary amount: {value!r}") from exc
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_text(value) -> str:
    """Render an amount in the canonical stored form."""
    return str(to_decimal(value))
