"""Money — dollar input becomes integer cents, cents render as dollar strings.

Invariants:
    - Conversion rounds half-up to the nearest cent
    - Non-numeric and non-finite input is a ValidationError
"""

from decimal import Decimal

import pytest

from core.errors import ValidationError
from services.money import dollars_to_cents, format_cents


def test_dollars_to_cents_exact():
    assert dollars_to_cents(Decimal("49.99")) == 4999
    assert dollars_to_cents("200") == 20000
    assert dollars_to_cents(0) == 0


def test_dollars_to_cents_accepts_float():
    """Floats go through their string form so 49.99 does not become 4998."""
    assert dollars_to_cents(49.99) == 4999
    assert dollars_to_cents(0.1) == 10


def test_dollars_to_cents_rounds_half_up():
    assert dollars_to_cents("0.005") == 1
    assert dollars_to_cents("10.004") == 1000


@pytest.mark.parametrize("bad", ["abc", "NaN", "Infinity", None])
def test_dollars_to_cents_rejects_garbage(bad):
    with pytest.raises(ValidationError):
        dollars_to_cents(bad)


def test_format_cents():
    assert format_cents(4999) == "$49.99"
    assert format_cents(0) == "$0.00"
    assert format_cents(5) == "$0.05"
    assert format_cents(123456789) == "$1,234,567.89"


def test_price_survives_entry_and_display():
    """49.99 entered is stored as 4999 and shown as $49.99."""
    assert format_cents(dollars_to_cents("49.99")) == "$49.99"
