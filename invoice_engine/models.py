"""Pydantic models for the invoice engine — input and output contracts."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from invoice_engine.rounding import to_number


class LineItem(BaseModel):
    """One billable line. Read-only: the engine never mutates its input."""

    model_config = ConfigDict(frozen=True)

    quantity: float = 0.0
    unit_price: float = 0.0
    vat_rate: float = 0.0
    description: str = ""
    unit: str = ""

    @field_validator("quantity", "unit_price", "vat_rate", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("description", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class DiscountType(str, Enum):
    NONE = "none"
    AMOUNT = "amount"
    PERCENT = "percent"


_DISCOUNT_TYPE_ALIASES = {
    "percentage": "percent",
    "fixed": "amount",
    "fixed-amount": "amount",
    "fixed_amount": "amount",
}


class DiscountSpec(BaseModel):
    """Whole-invoice discount, applied before VAT."""

    model_config = ConfigDict(frozen=True)

    type: DiscountType = DiscountType.NONE
    value: float = 0.0

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> DiscountType:
        if isinstance(value, DiscountType):
            return value
        text = str(value).strip().lower()
        try:
            return DiscountType(_DISCOUNT_TYPE_ALIASES.get(text, text))
        except ValueError:
            return DiscountType.NONE

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> float:
        return to_number(value)


NO_DISCOUNT = DiscountSpec()


class RateGroup(BaseModel):
    """Per-VAT-rate accumulator used while allocating the discount."""

    rate: float
    net: float = 0.0
    discount: float = 0.0


class InvoiceTotals(BaseModel):
    subtotal: float = 0.0
    discount_amount: float = 0.0
    taxable: float = 0.0
    vat_amount: float = 0.0
    total: float = 0.0


class VatGroup(BaseModel):
    rate: float
    display_rate: str
    net_amount: float = 0.0
    discount_amount: float = 0.0
    vat_amount: float = 0.0


class VatSummary(BaseModel):
    groups: list[VatGroup] = Field(default_factory=list)
    total_net: float = 0.0
    total_vat: float = 0.0


# ---------------------------------------------------------------------------
# Consistency checks
# ---------------------------------------------------------------------------


class StatedTotals(BaseModel):
    """Figures as stored on a document; ``None`` means "not stated"."""

    subtotal: float | None = None
    discount_amount: float | None = None
    vat_amount: float | None = None
    total: float | None = None


class Warning(BaseModel):
    code: str
    message: str
    details: dict = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Invoice status
# ---------------------------------------------------------------------------


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    VOID = "void"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class DueStatus(str, Enum):
    NOT_DUE = "not_due"
    DUE = "due"
    OVERDUE = "overdue"


class InvoiceStatusInfo(BaseModel):
    document: DocumentStatus
    payment: PaymentStatus
    due: DueStatus
    display_status: str


# ---------------------------------------------------------------------------
# HTTP request / response bodies
# ---------------------------------------------------------------------------


class TotalsRequest(BaseModel):
    items: list[LineItem] = Field(default_factory=list)
    discount: DiscountSpec | None = None


class CheckRequest(TotalsRequest):
    stated: StatedTotals = Field(default_factory=StatedTotals)


class CheckResponse(BaseModel):
    request_id: str
    trace_id: str
    totals: InvoiceTotals
    warnings: list[Warning] = Field(default_factory=list)
    summary: str = ""


class StatusRequest(BaseModel):
    document_status: DocumentStatus = DocumentStatus.ISSUED
    total_amount: float = 0.0
    paid_amount: float = 0.0
    due_date: str | None = None


class CustomerCodeRequest(BaseModel):
    name: str | None = None
    business_name: str | None = None
    existing_codes: list[str] = Field(default_factory=list)


class CustomerCodeResponse(BaseModel):
    code: str


class DocumentItemsRequest(BaseModel):
    items: list[LineItem] = Field(default_factory=list)


class DocumentValidation(BaseModel):
    valid: bool
    error: str | None = None
