"""Invoice totals and VAT summary.

Order of operations: subtotal -> discount -> taxable -> VAT -> total.
The VAT summary runs through the same grouping and allocation so that the
per-rate breakdown printed on a document always reconciles with the totals.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from opentelemetry import trace

from invoice_engine.allocation import allocate_discount, group_by_rate, largest_group_index
from invoice_engine.discount import calculate_discount_amount
from invoice_engine.formatting import format_percent
from invoice_engine.models import InvoiceTotals, RateGroup, VatGroup, VatSummary
from invoice_engine.rounding import round2

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("invoice-engine")


def _group_taxable(group: RateGroup) -> float:
    return round2(max(group.net - group.discount, 0.0))


def _compute(
    items: Iterable[Any] | None, discount: Any
) -> tuple[InvoiceTotals, list[RateGroup]]:
    raw_subtotal, groups = group_by_rate(items)
    subtotal = round2(raw_subtotal)

    discount_amount = calculate_discount_amount(subtotal, discount)
    allocate_discount(groups, discount_amount, subtotal)

    vat_amount = 0.0
    for group in groups:
        vat_amount += round2(_group_taxable(group) * group.rate)
    vat_amount = round2(vat_amount)

    # Not the sum of group taxables: that would compound per-group rounding.
    taxable = round2(subtotal - discount_amount)
    total = round2(taxable + vat_amount)

    totals = InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable=taxable,
        vat_amount=vat_amount,
        total=total,
    )
    return totals, groups


def calculate_invoice_totals(
    items: Iterable[Any] | None, discount: Any = None
) -> InvoiceTotals:
    """Compute subtotal, discount, taxable amount, VAT and grand total.

    *items* may hold :class:`LineItem` models or plain mappings with
    ``quantity``, ``unit_price`` and ``vat_rate``; *discount* may be a
    :class:`DiscountSpec`, a mapping or ``None``. Never raises on bad numbers.
    """
    with tracer.start_as_current_span("engine.calculate_totals") as span:
        totals, groups = _compute(items, discount)
        span.set_attribute("totals.rate_groups", len(groups))
        span.set_attribute("totals.total", totals.total)
        return totals


def calculate_vat_summary(
    items: Iterable[Any] | None, discount: Any = None
) -> VatSummary:
    """Per-rate breakdown of the taxable base and VAT, sorted by rate.

    Row nets are rounded per group, so any cent left over against
    ``total_net`` is added to the row of the largest group, the same way
    the discount residue is placed.
    """
    with tracer.start_as_current_span("engine.vat_summary") as span:
        totals, groups = _compute(items, discount)
        span.set_attribute("totals.rate_groups", len(groups))

        rows = [
            VatGroup(
                rate=group.rate,
                display_rate=format_percent(group.rate),
                net_amount=_group_taxable(group),
                discount_amount=group.discount,
                vat_amount=round2(_group_taxable(group) * group.rate),
            )
            for group in groups
        ]

        diff = round2(totals.taxable - sum(row.net_amount for row in rows))
        if diff != 0 and rows:
            target = rows[largest_group_index(groups)]
            target.net_amount = round2(target.net_amount + diff)
            logger.debug("Applied net correction %.2f to rate %s", diff, target.rate)

        return VatSummary(
            groups=sorted(rows, key=lambda row: row.rate),
            total_net=totals.taxable,
            total_vat=totals.vat_amount,
        )
