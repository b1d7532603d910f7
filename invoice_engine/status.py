"""Invoice status model.

Document state is stored (draft / issued / void); payment and due states are
derived from amounts and the due date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from invoice_engine.models import DocumentStatus, DueStatus, InvoiceStatusInfo, PaymentStatus
from invoice_engine.rounding import to_number


def compute_payment_status(total_amount: Any, paid_amount: Any) -> PaymentStatus:
    paid = to_number(paid_amount)
    if paid <= 0:
        return PaymentStatus.UNPAID
    if paid >= to_number(total_amount):
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL


def _as_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")).date()
    except ValueError:
        return None


def compute_due_status(
    due_date: Any,
    payment_status: PaymentStatus,
    today: date | None = None,
) -> DueStatus:
    if payment_status is PaymentStatus.PAID:
        return DueStatus.NOT_DUE
    due = _as_date(due_date)
    if due is None:
        return DueStatus.NOT_DUE

    today = today or date.today()
    if due < today:
        return DueStatus.OVERDUE
    if due == today:
        return DueStatus.DUE
    return DueStatus.NOT_DUE


def get_invoice_status(
    document_status: DocumentStatus | str,
    total_amount: Any,
    paid_amount: Any,
    due_date: Any = None,
    today: date | None = None,
) -> InvoiceStatusInfo:
    """Combine stored and derived state into the status shown to the user."""
    document = DocumentStatus(document_status)
    payment = compute_payment_status(total_amount, paid_amount)
    due = compute_due_status(due_date, payment, today)

    if document is DocumentStatus.DRAFT:
        display = "draft"
    elif document is DocumentStatus.VOID:
        display = "void"
    elif payment is PaymentStatus.PAID:
        display = "paid"
    elif due is DueStatus.OVERDUE:
        display = "overdue"
    elif payment is PaymentStatus.PARTIAL:
        display = "partial"
    else:
        display = "issued"

    return InvoiceStatusInfo(
        document=document,
        payment=payment,
        due=due,
        display_status=display,
    )
