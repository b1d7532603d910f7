"""Grouping of line items by VAT rate and proportional discount allocation.

The discount is split across rate groups in proportion to their net amount.
Each share is rounded to the cent on its own, so the rounded shares can drift
a cent or two away from the total discount; that residue is pushed onto the
group with the largest net so the parts always add back up to the whole.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from invoice_engine.models import LineItem, RateGroup
from invoice_engine.rounding import line_net, normalize_rate, round2

logger = logging.getLogger(__name__)


def as_line_item(item: Any) -> LineItem:
    """Coerce a model, mapping or attribute bag into a :class:`LineItem`."""
    if isinstance(item, LineItem):
        return item
    if item is None:
        return LineItem()
    if isinstance(item, Mapping):
        return LineItem.model_validate(dict(item))
    return LineItem(
        quantity=getattr(item, "quantity", 0),
        unit_price=getattr(item, "unit_price", 0),
        vat_rate=getattr(item, "vat_rate", 0),
        description=getattr(item, "description", ""),
        unit=getattr(item, "unit", ""),
    )


def group_by_rate(items: Iterable[Any] | None) -> tuple[float, list[RateGroup]]:
    """Return ``(unrounded_subtotal, groups)``.

    Groups keep the order in which each normalized rate first appears.
    """
    groups: dict[float, RateGroup] = {}
    subtotal = 0.0
    for raw in items or []:
        item = as_line_item(raw)
        net = line_net(item.quantity, item.unit_price)
        subtotal += net
        rate = normalize_rate(item.vat_rate)
        group = groups.get(rate)
        if group is None:
            group = groups[rate] = RateGroup(rate=rate)
        group.net += net
    return subtotal, list(groups.values())


def largest_group_index(groups: list[RateGroup]) -> int:
    # Signed comparison; strict ">" keeps the first group on ties.
    largest = 0
    for idx in range(1, len(groups)):
        if groups[idx].net > groups[largest].net:
            largest = idx
    return largest


def allocate_discount(
    groups: list[RateGroup],
    discount_amount: float,
    subtotal: float,
) -> list[RateGroup]:
    """Fill in ``group.discount`` for every group and return *groups*.

    After allocation ``round2(sum(g.discount for g in groups))`` equals
    *discount_amount*.
    """
    allocated = 0.0
    for group in groups:
        share = group.net / subtotal if subtotal > 0 else 0.0
        group.discount = round2(discount_amount * share)
        allocated += group.discount

    diff = round2(discount_amount - allocated)
    if diff != 0 and groups:
        target = groups[largest_group_index(groups)]
        target.discount = round2(target.discount + diff)
        logger.debug("Applied rounding correction %.2f to rate %s", diff, target.rate)

    return groups
