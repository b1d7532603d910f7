"""Structured audit logging for the invoice engine service.

Rules:
- Never log line descriptions or customer data
- Log figures and counts only
- Structured JSON format
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


logger = logging.getLogger("invoice_engine.audit")


def _emit(event: str, **kwargs) -> None:
    """Emit a structured audit log entry."""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "invoice-engine",
        "event": event,
        **kwargs,
    }
    logger.info(json.dumps(entry, default=str))


def log_request_received(request_id: str, endpoint: str, line_item_count: int, trace_id: str) -> None:
    _emit(
        "request_received",
        request_id=request_id,
        endpoint=endpoint,
        line_item_count=line_item_count,
        trace_id=trace_id,
    )


def log_totals_computed(
    request_id: str,
    trace_id: str,
    subtotal: float,
    discount_amount: float,
    total: float,
    duration_ms: float,
) -> None:
    _emit(
        "totals_computed",
        request_id=request_id,
        trace_id=trace_id,
        subtotal=subtotal,
        discount_amount=discount_amount,
        total=total,
        duration_ms=round(duration_ms, 2),
    )


def log_check_completed(
    request_id: str,
    trace_id: str,
    warning_codes: list[str],
    duration_ms: float,
) -> None:
    _emit(
        "check_completed",
        request_id=request_id,
        trace_id=trace_id,
        warning_count=len(warning_codes),
        warning_codes=warning_codes,
        duration_ms=round(duration_ms, 2),
    )
