"""Tests for totals consistency checks."""

from invoice_engine.checks import check_totals
from invoice_engine.models import StatedTotals


ITEMS = [
    {"description": "Consulting", "quantity": 1, "unit_price": 100, "vat_rate": 18},
    {"description": "Exempt course", "quantity": 1, "unit_price": 100, "vat_rate": 0},
]
DISCOUNT = {"type": "amount", "value": 50}


class TestCheckTotals:
    """Test check_totals."""

    def test_consistent_document(self):
        stated = StatedTotals(subtotal=200, discount_amount=50, vat_amount=13.5, total=163.5)
        totals, warnings, summary = check_totals(ITEMS, DISCOUNT, stated)
        assert warnings == []
        assert totals.total == 163.5
        assert summary.startswith("Totals reconcile")
        assert "€163.50" in summary

    def test_unstated_figures_are_not_checked(self):
        _, warnings, _ = check_totals(ITEMS, DISCOUNT, StatedTotals(total=163.5))
        assert warnings == []

    def test_vat_computed_without_discount_is_flagged(self):
        """A document that taxed the pre-discount amount overstates VAT."""
        stated = StatedTotals(vat_amount=18.0, total=168.0)
        _, warnings, summary = check_totals(ITEMS, DISCOUNT, stated)
        codes = [w.code for w in warnings]
        assert codes == ["VAT_MISMATCH", "TOTAL_MISMATCH"]
        assert warnings[0].details == {"expected": 13.5, "stated": 18.0, "difference": 4.5}
        assert summary.startswith("2 issues were found")

    def test_within_tolerance(self):
        stated = StatedTotals(subtotal=200.004)
        _, warnings, _ = check_totals(ITEMS, DISCOUNT, stated)
        assert warnings == []

    def test_custom_tolerance(self):
        stated = StatedTotals(subtotal=200.5)
        _, warnings, _ = check_totals(ITEMS, DISCOUNT, stated, tolerance=1.0)
        assert warnings == []

    def test_missing_line_items(self):
        _, warnings, summary = check_totals([], None, None)
        assert [w.code for w in warnings] == ["MISSING_LINE_ITEMS"]
        assert summary.startswith("1 issue was found")

    def test_invalid_lines(self):
        items = ITEMS + [{"description": "Refund", "quantity": 1, "unit_price": -10, "vat_rate": 18}]
        _, warnings, _ = check_totals(items)
        assert warnings[0].code == "INVALID_LINE_ITEM"
        assert warnings[0].details == {"lines": [2]}

    def test_discount_mismatch(self):
        _, warnings, _ = check_totals(ITEMS, DISCOUNT, StatedTotals(discount_amount=60))
        assert [w.code for w in warnings] == ["DISCOUNT_MISMATCH"]
        assert "€50.00" in warnings[0].message
