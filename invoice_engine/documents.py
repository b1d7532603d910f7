"""Line-item validation for invoice, quotation and credit-note drafts."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from invoice_engine.allocation import as_line_item


def validate_document_items(items: Iterable[Any] | None) -> str | None:
    """Return a user-facing error message, or ``None`` when the items are usable."""
    lines = [as_line_item(item) for item in items or []]
    if not lines:
        return "Please add at least one line item"

    if any(
        not line.description.strip() or line.quantity <= 0 or line.unit_price < 0
        for line in lines
    ):
        return "Please fill in all item details"

    return None
