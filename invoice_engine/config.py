"""Invoice engine configuration — all values from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _float_env(name: str, default: str) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return float(default)


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration loaded once at startup."""

    # Display
    currency_code: str = field(default_factory=lambda: os.getenv("INVOICE_CURRENCY", "EUR"))
    currency_symbol: str = field(default_factory=lambda: os.getenv("INVOICE_CURRENCY_SYMBOL", "€"))
    date_format: str = field(default_factory=lambda: os.getenv("INVOICE_DATE_FORMAT", "%d/%m/%Y"))

    # Consistency checks
    tolerance: float = field(default_factory=lambda: _float_env("INVOICE_CHECK_TOLERANCE", "0.005"))

    # Observability
    otel_endpoint: str = field(default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", ""))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


config = EngineConfig()
