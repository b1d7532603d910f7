"""OpenTelemetry setup for the invoice engine service.

The engine modules only ever call ``trace.get_tracer``; until
:func:`init_telemetry` installs a provider their spans are no-ops, which keeps
the calculation functions free of side effects in library use.
"""

from __future__ import annotations

import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from invoice_engine.config import config

logger = logging.getLogger(__name__)

SERVICE_NAME = "invoice-engine"

_provider: TracerProvider | None = None
_tracer: trace.Tracer | None = None


def build_span_processor(otel_endpoint: str, log_level: str) -> SpanProcessor | None:
    """Pick the exporter: OTLP when an endpoint is set, console at DEBUG, else none."""
    if otel_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )
        except ImportError:
            logger.warning("OTLP exporter not installed, falling back to console")
            return BatchSpanProcessor(ConsoleSpanExporter())
        logger.info("OTLP exporter configured: %s", otel_endpoint)
        return BatchSpanProcessor(OTLPSpanExporter(endpoint=otel_endpoint))

    if log_level.upper() == "DEBUG":
        return BatchSpanProcessor(ConsoleSpanExporter())
    return None


def init_telemetry() -> trace.Tracer:
    """Install the tracer provider once and return the service tracer."""
    global _provider, _tracer
    if _tracer is not None:
        return _tracer

    _provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
    processor = build_span_processor(config.otel_endpoint, config.log_level)
    if processor is not None:
        _provider.add_span_processor(processor)
    trace.set_tracer_provider(_provider)

    # W3C trace-context propagation from callers
    set_global_textmap(CompositePropagator([TraceContextTextMapPropagator()]))

    _tracer = trace.get_tracer(SERVICE_NAME)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Return the configured tracer (initializes on first call)."""
    if _tracer is None:
        return init_telemetry()
    return _tracer


def shutdown_telemetry() -> None:
    """Flush pending spans; called when the service stops."""
    if _provider is not None:
        _provider.shutdown()
