"""Tests for display formatting helpers."""

from datetime import date, datetime

import pytest

from invoice_engine.formatting import format_date, format_money, format_percent, vat_label


class TestFormatMoney:
    """Test format_money."""

    def test_default_symbol_and_grouping(self):
        assert format_money(1234.5) == "€1,234.50"

    def test_millions(self):
        assert format_money(1234567.891) == "€1,234,567.89"

    def test_rounds_half_up(self):
        assert format_money(1.005) == "€1.01"

    def test_negative(self):
        assert format_money(-20) == "-€20.00"

    def test_custom_symbol(self):
        assert format_money(5, symbol="$") == "$5.00"

    @pytest.mark.parametrize("value", [None, "", "abc", 0])
    def test_invalid_is_zero(self, value):
        assert format_money(value) == "€0.00"


class TestFormatPercent:
    """Test format_percent."""

    @pytest.mark.parametrize(
        "rate, expected",
        [(0.18, "18%"), (18, "18%"), (0.05, "5%"), (7.5, "7.5%"), (0, "0%"), (None, "0%")],
    )
    def test_rates(self, rate, expected):
        assert format_percent(rate) == expected


class TestFormatDate:
    """Test format_date."""

    def test_iso_string(self):
        assert format_date("2024-01-15") == "15/01/2024"

    def test_iso_timestamp(self):
        assert format_date("2024-02-14T09:30:00Z") == "14/02/2024"

    def test_date_and_datetime(self):
        assert format_date(date(2025, 12, 1)) == "01/12/2025"
        assert format_date(datetime(2025, 12, 1, 23, 59)) == "01/12/2025"

    def test_empty(self):
        assert format_date("") == ""
        assert format_date(None) == ""

    def test_unparseable_returned_unchanged(self):
        assert format_date("next tuesday") == "next tuesday"

    def test_custom_format(self):
        assert format_date("2024-01-15", fmt="%Y/%m/%d") == "2024/01/15"


class TestVatLabel:
    """Test vat_label."""

    def test_single_rate(self):
        items = [{"vat_rate": 0.18}, {"vat_rate": 18}]
        assert vat_label(items) == "VAT (18%)"

    def test_mixed_rates(self):
        assert vat_label([{"vat_rate": 18}, {"vat_rate": 7}]) == "VAT"

    def test_no_items(self):
        assert vat_label([]) == "VAT"
