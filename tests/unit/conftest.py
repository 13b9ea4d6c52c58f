from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_invoice():
    """Factory for invoice lines with sensible defaults"""

    def _make(invoice_number, customer_name="Acme Ltd", amount="100", **overrides):
        values = {
            "customer_code": overrides.pop("customer_code", customer_name[:4].upper()),
            "customer_name": customer_name,
            "invoice_date": "2024-01-01T00:00:00",
            "due_date": "2024-01-31T00:00:00",
            "invoice_number": invoice_number,
            "amount": Decimal(str(amount)),
            "line_number": 1,
        }
        values.update(overrides)
        return Invoice(**values)

    return _make


@pytest.fixture
def make_remark():
    """Factory for persisted-looking remarks"""

    def _make(invoice_id, status=PaymentStatus.UNPAID, **overrides):
        values = {
            "invoice_id": invoice_id,
            "status": status,
            "created_at": datetime(2024, 1, 2, 9, 0),
            "status_date": datetime(2024, 1, 2, 9, 0),
        }
        values.update(overrides)
        return InvoiceRemark(**values)

    return _make
