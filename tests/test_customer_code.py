"""Tests for customer codes and document item validation."""

from invoice_engine.customer_code import (
    generate_customer_code,
    make_code_unique,
    sanitize_customer_code,
)
from invoice_engine.documents import validate_document_items


class TestGenerateCustomerCode:
    """Test generate_customer_code."""

    def test_business_name_preferred(self):
        assert generate_customer_code("John Borg", "Acme Trading Ltd.") == "ACMETRADIN"

    def test_falls_back_to_name(self):
        assert generate_customer_code("John Borg", "   ") == "JOHNBORG"

    def test_empty(self):
        assert generate_customer_code(None) == ""


class TestMakeCodeUnique:
    """Test make_code_unique."""

    def test_free_code_unchanged(self):
        assert make_code_unique("ACME", ["OTHER"]) == "ACME"

    def test_numeric_suffix(self):
        assert make_code_unique("ACME", ["ACME", "ACME2"]) == "ACME3"

    def test_suffix_keeps_length(self):
        assert make_code_unique("ACMETRADIN", ["ACMETRADIN"]) == "ACMETRADI2"
        existing = ["ACMETRADIN"] + [f"ACMETRADI{i}" for i in range(2, 10)]
        assert make_code_unique("ACMETRADIN", existing) == "ACMETRAD10"

    def test_random_fallback(self):
        existing = ["ACME"] + [f"ACME{i}" for i in range(2, 100)]
        code = make_code_unique("ACME", existing)
        assert code.startswith("ACME")
        assert len(code) == 7
        assert code not in existing


class TestSanitizeCustomerCode:
    """Test sanitize_customer_code."""

    def test_cleans_and_truncates(self):
        assert sanitize_customer_code("ab-c d_e!fghijklmn") == "ABCDEFGHIJ"

    def test_none(self):
        assert sanitize_customer_code(None) == ""


class TestValidateDocumentItems:
    """Test validate_document_items."""

    def test_empty(self):
        assert validate_document_items([]) == "Please add at least one line item"

    def test_valid(self):
        items = [{"description": "Hosting", "quantity": 1, "unit_price": 0, "vat_rate": 18}]
        assert validate_document_items(items) is None

    def test_missing_description(self):
        items = [{"description": " ", "quantity": 1, "unit_price": 10}]
        assert validate_document_items(items) == "Please fill in all item details"

    def test_zero_quantity(self):
        items = [{"description": "Hosting", "quantity": 0, "unit_price": 10}]
        assert validate_document_items(items) == "Please fill in all item details"

    def test_negative_price(self):
        items = [{"description": "Hosting", "quantity": 1, "unit_price": -1}]
        assert validate_document_items(items) == "Please fill in all item details"
