"""Unit tests for invoice remarks and value helpers"""

from datetime import date, datetime

import pytest

from src.domain.invoice_remark import (
    PAYMENT_STATUS_BADGES,
    InvoiceRemark,
    InvoiceRemarkDocument,
    PaymentStatus,
)
from src.domain.ordering import collation_key, compare, fold_text, parse_day


class TestDefaultRemark:

    def test_default_remark_is_unpaid_and_stamped(self):
        """
        Given: An invoice without a stored remark
        When: The default remark is synthesized
        Then: It is unpaid, empty, and created/status dates equal now
        """
        now = datetime(2024, 2, 1, 8, 30)

        remark = InvoiceRemark.default_for("IN240001", now)

        assert remark.invoice_id == "IN240001"
        assert remark.status == PaymentStatus.UNPAID
        assert remark.text == ""
        assert remark.created_at == now
        assert remark.status_date == now
        assert remark.follow_up_date is None
        assert remark.updated_at is None

    def test_document_round_trips_to_remark(self):
        remark = InvoiceRemark.default_for("IN1", datetime(2024, 2, 1))

        document = InvoiceRemarkDocument(**remark.model_dump())

        assert document.to_remark() == remark


class TestPaymentStatus:

    @pytest.mark.parametrize(
        "status, is_open",
        [
            (PaymentStatus.UNPAID, True),
            (PaymentStatus.IN_COLLECTION, True),
            (PaymentStatus.PARTIALLY_PAID, True),
            (PaymentStatus.PAID, False),
            (PaymentStatus.CANCELLED, False),
        ],
    )
    def test_open_statuses(self, status, is_open):
        assert status.is_open is is_open

    def test_every_status_has_label_and_badge(self):
        for status in PaymentStatus:
            assert status.label
            assert status in PAYMENT_STATUS_BADGES


class TestOrderingHelpers:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2023-10-26T00:00:00", date(2023, 10, 26)),
            ("2023-10-26", date(2023, 10, 26)),
            (datetime(2023, 10, 26, 5), date(2023, 10, 26)),
            ("", None),
            ("26/10/2023", None),
            (None, None),
        ],
    )
    def test_parse_day(self, value, expected):
        assert parse_day(value) == expected

    def test_fold_text_ignores_case_and_accents(self):
        assert fold_text("Café ÉCLAIR") == fold_text("cafe eclair")

    def test_collation_key_orders_numbers_by_value(self):
        assert collation_key("item 9") < collation_key("Item 10")

    def test_compare_puts_missing_last_in_both_directions(self):
        assert compare(None, 1) == 1
        assert compare(None, 1, descending=True) == 1
        assert compare(1, 2, descending=True) == 1
        assert compare(2, 2) == 0
