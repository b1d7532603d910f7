"""Tests for configuration and telemetry wiring."""

import os
from unittest import mock

from opentelemetry.sdk.trace.export import BatchSpanProcessor

from invoice_engine.config import EngineConfig
from invoice_engine.telemetry import build_span_processor


class TestEngineConfig:
    """Test EngineConfig environment loading."""

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            cfg = EngineConfig()
        assert cfg.currency_code == "EUR"
        assert cfg.currency_symbol == "€"
        assert cfg.date_format == "%d/%m/%Y"
        assert cfg.tolerance == 0.005
        assert cfg.log_level == "INFO"

    def test_env_overrides(self):
        env = {
            "INVOICE_CURRENCY": "GBP",
            "INVOICE_CURRENCY_SYMBOL": "£",
            "INVOICE_CHECK_TOLERANCE": "0.02",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            cfg = EngineConfig()
        assert cfg.currency_code == "GBP"
        assert cfg.currency_symbol == "£"
        assert cfg.tolerance == 0.02

    def test_bad_tolerance_falls_back(self):
        with mock.patch.dict(os.environ, {"INVOICE_CHECK_TOLERANCE": "lots"}, clear=True):
            assert EngineConfig().tolerance == 0.005


class TestBuildSpanProcessor:
    """Test exporter selection."""

    def test_silent_by_default(self):
        assert build_span_processor("", "INFO") is None

    def test_console_at_debug(self):
        assert isinstance(build_span_processor("", "debug"), BatchSpanProcessor)
