"""Decimal helpers for peso amounts."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_amount(value) -> Decimal:
    """Coerce ``value`` to a Decimal rounded to two places.

    Floats go through ``str`` first so ``0.1`` becomes ``0.10`` rather than
    its binary expansion. Raises ``ValueError`` for anything non-numeric and
    for magnitudes too large to carry cents in the default context.
    """
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"Not a monetary amount: {value!r}")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Not a monetary amount: {value!r}") from None


def format_amount(amount: Decimal, currency: str = "PHP") -> str:
    symbol = "₱" if currency == "PHP" else f"{currency} "
    return f"{symbol}{amount.quantize(CENTS):,}"
