"""Invoice Engine — FastAPI application.

POST /totals      — Subtotal, discount, taxable amount, VAT and total.
POST /vat-summary — Per-rate VAT breakdown reconciled with /totals.
POST /check       — Compare stated document figures with recomputed ones.
POST /status      — Document / payment / due status of an invoice.
POST /customer-code      — Unique short reference code for a new customer.
POST /documents/validate — Line-item checks before a draft is saved.
GET  /health      — Liveness check.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse
from opentelemetry.propagate import extract

from invoice_engine.audit import (
    log_check_completed,
    log_request_received,
    log_totals_computed,
)
from invoice_engine.checks import check_totals
from invoice_engine.config import config
from invoice_engine.customer_code import generate_customer_code, make_code_unique
from invoice_engine.documents import validate_document_items
from invoice_engine.models import (
    CheckRequest,
    CheckResponse,
    CustomerCodeRequest,
    CustomerCodeResponse,
    DocumentItemsRequest,
    DocumentValidation,
    InvoiceStatusInfo,
    InvoiceTotals,
    StatusRequest,
    TotalsRequest,
    VatSummary,
)
from invoice_engine.status import get_invoice_status
from invoice_engine.telemetry import get_tracer, init_telemetry, shutdown_telemetry
from invoice_engine.totals import calculate_invoice_totals, calculate_vat_summary

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
)
logger = logging.getLogger("invoice_engine")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Invoice Engine",
    version="0.1.0",
    description="Invoice totals, discount allocation and VAT summaries",
)


@app.on_event("startup")
async def _startup() -> None:
    init_telemetry()
    logger.info(
        "Invoice engine started — currency=%s, otel=%s",
        config.currency_code,
        bool(config.otel_endpoint),
    )


@app.on_event("shutdown")
async def _shutdown() -> None:
    shutdown_telemetry()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    return {"status": "ok", "currency": config.currency_code}


@app.post("/totals", response_model=InvoiceTotals)
async def totals_endpoint(
    body: TotalsRequest,
    request: Request,
    x_request_id: str = Header(default=""),
):
    tracer = get_tracer()
    ctx = extract(carrier=dict(request.headers))

    with tracer.start_as_current_span(
        "engine.handle_totals",
        context=ctx,
        attributes={"items.count": len(body.items)},
    ) as span:
        request_id = x_request_id or str(uuid.uuid4())
        trace_id = format(span.get_span_context().trace_id, "032x")
        span.set_attribute("request.id", request_id)

        log_request_received(request_id, "/totals", len(body.items), trace_id)
        t0 = time.perf_counter()

        totals = calculate_invoice_totals(body.items, body.discount)

        log_totals_computed(
            request_id=request_id,
            trace_id=trace_id,
            subtotal=totals.subtotal,
            discount_amount=totals.discount_amount,
            total=totals.total,
            duration_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return totals


@app.post("/vat-summary", response_model=VatSummary)
async def vat_summary_endpoint(body: TotalsRequest, request: Request):
    tracer = get_tracer()
    ctx = extract(carrier=dict(request.headers))

    with tracer.start_as_current_span("engine.handle_vat_summary", context=ctx):
        return calculate_vat_summary(body.items, body.discount)


@app.post("/check", response_model=CheckResponse)
async def check_endpoint(
    body: CheckRequest,
    request: Request,
    x_request_id: str = Header(default=""),
):
    """Reconcile the figures stored on a document with the engine's figures."""
    tracer = get_tracer()
    ctx = extract(carrier=dict(request.headers))

    with tracer.start_as_current_span(
        "engine.handle_check",
        context=ctx,
        attributes={"items.count": len(body.items)},
    ) as span:
        request_id = x_request_id or str(uuid.uuid4())
        trace_id = format(span.get_span_context().trace_id, "032x")
        span.set_attribute("request.id", request_id)

        log_request_received(request_id, "/check", len(body.items), trace_id)
        t0 = time.perf_counter()

        totals, warnings, summary = check_totals(body.items, body.discount, body.stated)

        log_check_completed(
            request_id=request_id,
            trace_id=trace_id,
            warning_codes=[w.code for w in warnings],
            duration_ms=(time.perf_counter() - t0) * 1000.0,
        )
        span.set_attribute("response.warning_count", len(warnings))

        return CheckResponse(
            request_id=request_id,
            trace_id=trace_id,
            totals=totals,
            warnings=warnings,
            summary=summary,
        )


@app.post("/status", response_model=InvoiceStatusInfo)
async def status_endpoint(body: StatusRequest):
    return get_invoice_status(
        body.document_status,
        body.total_amount,
        body.paid_amount,
        body.due_date,
    )


@app.post("/customer-code", response_model=CustomerCodeResponse)
async def customer_code_endpoint(body: CustomerCodeRequest):
    base = generate_customer_code(body.name, body.business_name)
    return CustomerCodeResponse(code=make_code_unique(base, body.existing_codes))


@app.post("/documents/validate", response_model=DocumentValidation)
async def validate_documents_endpoint(body: DocumentItemsRequest):
    error = validate_document_items(body.items)
    return DocumentValidation(valid=error is None, error=error)


# ---------------------------------------------------------------------------
# Error handler
# ---------------------------------------------------------------------------


@app.exception_handler(Exception)
async def _global_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error": str(exc)},
    )
