"""Unit tests for customer summaries"""

from decimal import Decimal

from src.domain.customer_summary import customer_invoices, summarize_customers
from src.domain.invoice_remark import PaymentStatus


class TestSummarizeCustomers:

    def test_totals_and_unpaid_totals_per_customer(self, make_invoice, make_remark):
        invoices = [
            make_invoice("1", customer_name="Globex", amount="100"),
            make_invoice("2", customer_name="Acme Ltd", amount="40"),
            make_invoice("3", customer_name="Globex", amount="60"),
        ]
        remarks = {"3": make_remark("3", PaymentStatus.PAID)}

        summaries = summarize_customers(invoices, remarks)

        assert [summary.customer_name for summary in summaries] == ["Acme Ltd", "Globex"]
        globex = summaries[1]
        assert globex.total_invoices == 2
        assert globex.total_amount == Decimal("160")
        assert globex.unpaid_invoices == 1
        assert globex.unpaid_amount == Decimal("100")

    def test_search_matches_name_or_code(self, make_invoice):
        invoices = [
            make_invoice("1", customer_name="Acme Ltd", customer_code="C-001"),
            make_invoice("2", customer_name="Globex", customer_code="C-002"),
        ]

        assert [s.customer_name for s in summarize_customers(invoices, {}, "GLOB")] == ["Globex"]
        assert [s.customer_name for s in summarize_customers(invoices, {}, "c-001")] == ["Acme Ltd"]


class TestCustomerInvoices:

    def test_newest_first_with_undated_last(self, make_invoice):
        invoices = [
            make_invoice("old", invoice_date="2024-01-01T00:00:00"),
            make_invoice("undated", invoice_date=""),
            make_invoice("new", invoice_date="2024-03-01T00:00:00"),
            make_invoice("other", customer_name="Globex"),
        ]

        result = customer_invoices(invoices, "Acme Ltd")

        assert [invoice.invoice_number for invoice in result] == ["new", "old", "undated"]
