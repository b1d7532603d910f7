"""Deterministic sample documents used by the demo and the tests."""

from __future__ import annotations

from invoice_engine.models import DiscountSpec, DiscountType, LineItem

SAMPLE_ITEMS = [
    LineItem(
        description="Professional Consulting Services",
        quantity=10,
        unit_price=75.00,
        vat_rate=0.18,
        unit="hours",
    ),
    LineItem(
        description="Website Development & Maintenance",
        quantity=1,
        unit_price=1500.00,
        vat_rate=0.18,
        unit="project",
    ),
    LineItem(
        description="Annual Software License",
        quantity=2,
        unit_price=250.00,
        vat_rate=0.18,
        unit="license",
    ),
]

# Mixed rates: 18% standard, 7% accommodation, 0% exempt.
MIXED_RATE_ITEMS = [
    LineItem(description="Conference Hall Rental", quantity=1, unit_price=333.33, vat_rate=18),
    LineItem(description="Hotel Night", quantity=3, unit_price=111.11, vat_rate=7),
    LineItem(description="Training Course (exempt)", quantity=1, unit_price=99.99, vat_rate=0),
]

SAMPLE_DISCOUNT = DiscountSpec(type=DiscountType.PERCENT, value=10)


def sample_payload(mixed: bool = False, discount: DiscountSpec | None = SAMPLE_DISCOUNT) -> dict:
    """Request body for ``POST /totals`` built from the sample items."""
    items = MIXED_RATE_ITEMS if mixed else SAMPLE_ITEMS
    return {
        "items": [item.model_dump() for item in items],
        "discount": discount.model_dump(mode="json") if discount else None,
    }
