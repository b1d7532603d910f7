"""Currency rounding and VAT-rate normalization primitives.

Every helper here coerces bad input to zero instead of raising: a line item
that is half-way through being edited must still produce totals.
"""

from __future__ import annotations

import math
import sys
from typing import Any

_EPSILON = sys.float_info.epsilon


def to_number(value: Any) -> float:
    """Coerce *value* to a finite float, falling back to 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round2(value: Any) -> float:
    """Round to 2 decimals, half away from zero.

    Machine epsilon is added to the magnitude first so values such as 1.005,
    stored as 1.00499999..., still round up to 1.01. Magnitudes too large to
    scale to cents are returned as they are.
    """
    number = to_number(value)
    if not math.isfinite(abs(number) * 100):
        return number
    cents = math.floor((abs(number) + _EPSILON) * 100 + 0.5)
    if cents == 0:
        return 0.0
    return math.copysign(cents / 100, number)


def normalize_rate(rate: Any) -> float:
    """Return the VAT rate as a fraction, accepting both 0.18 and 18."""
    r = to_number(rate)
    if r <= 0:
        return 0.0
    return r / 100 if r > 1 else r


def line_net(quantity: Any, unit_price: Any) -> float:
    return to_number(quantity) * to_number(unit_price)
