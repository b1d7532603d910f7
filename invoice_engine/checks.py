"""Totals consistency checks.

Rules implemented:
1. document has no line items
2. line with quantity <= 0 or negative unit price
3. stated subtotal / discount / VAT / total != recomputed figure
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from opentelemetry import trace

from invoice_engine.allocation import as_line_item
from invoice_engine.config import config
from invoice_engine.formatting import format_money
from invoice_engine.models import InvoiceTotals, StatedTotals, Warning
from invoice_engine.rounding import round2
from invoice_engine.totals import calculate_invoice_totals

tracer = trace.get_tracer("invoice-engine")

# (stated field, warning code, label used in messages)
_FIGURES = (
    ("subtotal", "SUBTOTAL_MISMATCH", "Subtotal"),
    ("discount_amount", "DISCOUNT_MISMATCH", "Discount"),
    ("vat_amount", "VAT_MISMATCH", "VAT"),
    ("total", "TOTAL_MISMATCH", "Total"),
)


def check_totals(
    items: Iterable[Any] | None,
    discount: Any = None,
    stated: StatedTotals | None = None,
    tolerance: float | None = None,
) -> tuple[InvoiceTotals, list[Warning], str]:
    """Recompute totals and compare them with what the document states.

    Returns ``(computed_totals, warnings, human_summary)``.
    """
    if tolerance is None:
        tolerance = config.tolerance
    if stated is None:
        stated = StatedTotals()

    with tracer.start_as_current_span("engine.check_totals") as span:
        lines = [as_line_item(item) for item in items or []]
        totals = calculate_invoice_totals(lines, discount)
        warnings: list[Warning] = []

        # ---- Rule 1: no line items ----
        if not lines:
            warnings.append(
                Warning(
                    code="MISSING_LINE_ITEMS",
                    message="Document has no line items",
                )
            )

        # ---- Rule 2: invalid lines ----
        invalid = [
            idx
            for idx, line in enumerate(lines)
            if line.quantity <= 0 or line.unit_price < 0
        ]
        if invalid:
            warnings.append(
                Warning(
                    code="INVALID_LINE_ITEM",
                    message=(
                        f"{len(invalid)} line(s) have a non-positive quantity "
                        "or a negative unit price"
                    ),
                    details={"lines": invalid},
                )
            )

        # ---- Rule 3: stated figures vs recomputed ----
        for field_name, code, label in _FIGURES:
            stated_value = getattr(stated, field_name)
            if stated_value is None:
                continue
            expected = getattr(totals, field_name)
            if abs(stated_value - expected) > tolerance:
                warnings.append(
                    Warning(
                        code=code,
                        message=(
                            f"{label} mismatch: computed {format_money(expected)} "
                            f"but document states {format_money(stated_value)}"
                        ),
                        details={
                            "expected": expected,
                            "stated": stated_value,
                            "difference": round2(stated_value - expected),
                        },
                    )
                )

        span.set_attribute("check.warning_count", len(warnings))
        return totals, warnings, _build_summary(totals, warnings)


def _build_summary(totals: InvoiceTotals, warnings: list[Warning]) -> str:
    """Generate a deterministic human-readable summary."""
    if not warnings:
        return (
            f"Totals reconcile: taxable {format_money(totals.taxable)}, "
            f"VAT {format_money(totals.vat_amount)}, "
            f"total {format_money(totals.total)}."
        )

    count = len(warnings)
    word = "issue was" if count == 1 else "issues were"
    lines = [f"{count} {word} found while reconciling the document totals:"]
    for w in warnings:
        lines.append(f"- {w.message}")
    lines.append("")
    lines.append("The stored document may not match what is shown to the customer.")
    return "\n".join(lines)
