# Money helpers
# Prices are stored and compared as integer cents; dollars only exist at the API edge.

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from core.errors import ValidationError


def dollars_to_cents(value: Union[Decimal, int, float, str]) -> int:
    """Convert a dollar amount to integer cents, rounding half-up (49.99 -> 4999)."""
    try:
        # str() keeps floats like 49.99 from dragging binary noise into the Decimal
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid price: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid price: {value!r}")
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_cents(cents: int) -> str:
    """Render cents as a dollar string, e.g. 4999 -> "$49.99"."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(int(cents)), 100)
    return f"{sign}${whole:,}.{frac:02d}"
