"""Whole-invoice discount calculation (applied before VAT)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from invoice_engine.models import NO_DISCOUNT, DiscountSpec, DiscountType
from invoice_engine.rounding import round2, to_number


def as_discount(discount: Any) -> DiscountSpec:
    """Coerce ``None``, a mapping or a model into a :class:`DiscountSpec`."""
    if discount is None:
        return NO_DISCOUNT
    if isinstance(discount, DiscountSpec):
        return discount
    if isinstance(discount, Mapping):
        return DiscountSpec.model_validate(dict(discount))
    return DiscountSpec(
        type=getattr(discount, "type", DiscountType.NONE),
        value=getattr(discount, "value", 0),
    )


def calculate_discount_amount(subtotal: Any, discount: Any = None) -> float:
    """Return the discount in currency units, always within ``[0, subtotal]``."""
    spec = as_discount(discount)
    subtotal = to_number(subtotal)

    if spec.type is DiscountType.NONE or not spec.value:
        return 0.0

    amount = 0.0
    if spec.type is DiscountType.PERCENT:
        pct = min(max(spec.value, 0.0), 100.0)
        amount = round2(subtotal * (pct / 100))
    elif spec.type is DiscountType.AMOUNT:
        amount = round2(min(max(spec.value, 0.0), subtotal))

    # A discount can never push the taxable amount below zero.
    return round2(max(min(amount, subtotal), 0.0))
