"""Unit tests for the recent activity feed"""

from datetime import datetime, timedelta

from src.domain.activity import MAX_ACTIVITIES, ActivityType, list_recent_activity
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus


class TestListRecentActivity:

    def test_describes_text_remarks_and_status_changes(self, make_invoice, make_remark):
        invoices = [
            make_invoice("1", customer_name="Acme Ltd"),
            make_invoice("2", customer_name="Globex"),
        ]
        remarks = {
            "1": make_remark("1", PaymentStatus.IN_COLLECTION, text="Called, will pay Friday",
                             updated_at=datetime(2024, 5, 1, 10)),
            "2": make_remark("2", PaymentStatus.PAID, updated_at=datetime(2024, 5, 2, 10)),
        }

        items = list_recent_activity(invoices, remarks)

        assert [item.invoice_number for item in items] == ["2", "1"]
        assert items[0].type == ActivityType.STATUS_CHANGE
        assert items[0].description == "Status updated to: Paid"
        assert items[1].type == ActivityType.REMARK
        assert items[1].description == "Called, will pay Friday"
        assert items[1].customer_name == "Acme Ltd"

    def test_skips_synthesized_defaults_and_unknown_invoices(self, make_invoice, make_remark):
        invoices = [make_invoice("1")]
        remarks = {
            "1": InvoiceRemark.default_for("1"),
            "gone": make_remark("gone", updated_at=datetime(2024, 5, 1)),
        }

        assert list_recent_activity(invoices, remarks) == []

    def test_limits_to_most_recent_items(self, make_invoice, make_remark):
        start = datetime(2024, 5, 1)
        invoices = [make_invoice(str(i)) for i in range(10)]
        remarks = {
            str(i): make_remark(str(i), text=f"note {i}", updated_at=start + timedelta(hours=i))
            for i in range(10)
        }

        items = list_recent_activity(invoices, remarks)

        assert len(items) == MAX_ACTIVITIES == 7
        assert items[0].invoice_number == "9"
        assert items[-1].invoice_number == "3"
