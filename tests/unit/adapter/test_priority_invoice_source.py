"""Unit tests for the Priority ERP invoice source

The ERP is replaced by an httpx.MockTransport.
"""

import base64
import json
from decimal import Decimal

import httpx
import pytest

from src.adapter.services.priority_invoice_source import PriorityInvoiceSource, normalize_record

ERP_URL = "https://erp.example.test/odata/Priority/demo.ini/company/TFNCITEMS2ONE"


def _source(handler, url=ERP_URL):
    return PriorityInvoiceSource(
        url=url,
        api_key="api-user",
        api_secret="PAT",
        transport=httpx.MockTransport(handler),
    )


def _record(**overrides):
    record = {
        "ACCNAME": "C1001",
        "ACCDES": "Acme Ltd",
        "CURDATE": "2024-01-05T00:00:00",
        "FNCDATE": "2024-02-04T00:00:00",
        "IVNUM": "IN240001",
        "SUM": 1170.5,
        "FNCPATNAME": "Bank transfer",
        "INVOICEFLAG": "Y",
        "FNCTRANS": 88231,
        "KLINE": 1,
    }
    record.update(overrides)
    return record


@pytest.mark.asyncio
class TestFetchInvoices:

    async def test_sends_basic_auth_and_normalizes_records(self):
        """
        Given: The ERP returns two records
        When: fetch_invoices is called
        Then: One authenticated GET is made and both records are normalized
        """
        # Arrange
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"value": [_record(), _record(IVNUM="IN240002", KLINE=2)]})

        # Act
        result = await _source(handler).fetch_invoices()

        # Assert
        assert result.is_ok()
        assert [invoice.invoice_number for invoice in result.value] == ["IN240001", "IN240002"]
        assert result.value[0].amount == Decimal("1170.5")
        assert result.value[0].transaction_id == "88231"
        assert len(requests) == 1
        expected = base64.b64encode(b"api-user:PAT").decode("ascii")
        assert requests[0].headers["Authorization"] == f"Basic {expected}"
        assert requests[0].headers["Accept"] == "application/json"
        assert requests[0].method == "GET"

    async def test_empty_value_list(self):
        result = await _source(lambda request: httpx.Response(200, json={"value": []})).fetch_invoices()

        assert result.is_ok()
        assert result.value == []

    async def test_http_error_status(self):
        result = await _source(lambda request: httpx.Response(503, text="unavailable")).fetch_invoices()

        assert result.is_err()
        assert result.error.code == "ERP_HTTP_ERROR"
        assert "503" in result.error.message

    @pytest.mark.parametrize(
        "payload",
        [{"items": []}, {"value": "nope"}, [1, 2, 3], {"value": [1, 2]}],
    )
    async def test_unexpected_shape_is_a_format_error(self, payload):
        result = await _source(lambda request: httpx.Response(200, json=payload)).fetch_invoices()

        assert result.is_err()
        assert result.error.code == "ERP_FORMAT_ERROR"

    async def test_invalid_json_is_a_fetch_error(self):
        result = await _source(lambda request: httpx.Response(200, text="<html>")).fetch_invoices()

        assert result.is_err()
        assert result.error.code == "ERP_FETCH_FAILED"

    async def test_transport_failure_is_a_fetch_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await _source(handler).fetch_invoices()

        assert result.is_err()
        assert result.error.code == "ERP_FETCH_FAILED"
        assert result.error.message.startswith("Failed to fetch or process invoice data")

    async def test_missing_url_fails_before_any_request(self):
        calls = []

        result = await _source(lambda request: calls.append(request), url=None).fetch_invoices()

        assert result.error.code == "ERP_NOT_CONFIGURED"
        assert calls == []


class TestNormalizeRecord:

    def test_missing_and_null_fields_get_defaults(self):
        invoice = normalize_record({"IVNUM": "X1", "ACCDES": None, "SUM": None})

        assert invoice.invoice_number == "X1"
        assert invoice.customer_name == ""
        assert invoice.customer_code == ""
        assert invoice.amount == Decimal("0")
        assert invoice.line_number == 0

    @pytest.mark.parametrize("raw, expected", [("12.75", Decimal("12.75")), ("abc", Decimal("0")), ("NaN", Decimal("0"))])
    def test_amount_parsing(self, raw, expected):
        assert normalize_record({"SUM": raw}).amount == expected

    def test_line_number_from_string(self):
        assert normalize_record({"KLINE": "3"}).line_number == 3
