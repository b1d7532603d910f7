"""Display formatting for money, VAT rates and dates."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from invoice_engine.allocation import as_line_item
from invoice_engine.config import config
from invoice_engine.rounding import normalize_rate, round2


def format_money(value: Any, symbol: str | None = None) -> str:
    """``1234.5 -> "€1,234.50"``; the sign goes before the symbol."""
    if symbol is None:
        symbol = config.currency_symbol
    amount = round2(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percent(rate: Any) -> str:
    """``0.18 -> "18%"``, ``7.5 -> "7.5%"``."""
    pct = round2(normalize_rate(rate) * 100)
    if pct == int(pct):
        return f"{int(pct)}%"
    return f"{pct:g}%"


def format_date(value: Any, fmt: str | None = None) -> str:
    """Render a date as day/month/year (configurable)."""
    if fmt is None:
        fmt = config.date_format
    if value is None or value == "":
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)

    text = str(value).strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text
    return parsed.strftime(fmt)


def vat_label(items: Iterable[Any] | None) -> str:
    """``"VAT (18%)"`` when every item shares one rate, otherwise ``"VAT"``."""
    rates = {normalize_rate(as_line_item(item).vat_rate) for item in items or []}
    if len(rates) == 1:
        return f"VAT ({format_percent(rates.pop())})"
    return "VAT"
