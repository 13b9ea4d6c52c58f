"""Integration tests for the receivables dashboard API"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from src.domain.invoice_remark import InvoiceRemarkDocument


class TestDashboardAPI:

    @pytest.mark.asyncio
    async def test_refresh_loads_invoices(self, client: AsyncClient, invoice_source):
        response = await client.post("/dashboard/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["load_status"] == "loaded"
        assert data["invoice_count"] == 3
        assert data["erp_config"]["refresh_interval_ms"] == 60000
        assert invoice_source.calls == 1

    @pytest.mark.asyncio
    async def test_refresh_erp_failure_returns_502(self, client: AsyncClient, invoice_source):
        invoice_source.fail_with("ERP_HTTP_ERROR", "ERP request failed with status 500")

        response = await client.post("/dashboard/refresh")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "ERP_HTTP_ERROR"
        state = (await client.get("/dashboard/state")).json()
        assert state["load_status"] == "failed"
        assert state["error"] == "ERP request failed with status 500"

    @pytest.mark.asyncio
    async def test_views_trigger_first_load_once(self, client: AsyncClient, invoice_source):
        metrics = await client.get("/dashboard/metrics")
        buckets = await client.get("/dashboard/overdue-buckets")

        assert metrics.status_code == 200
        assert metrics.json()["total_open_count"] == 3
        assert len(buckets.json()) == 4
        assert invoice_source.calls == 1


class TestInvoicesAPI:

    @pytest.mark.asyncio
    async def test_invoice_table_grouped_by_customer(self, client: AsyncClient):
        response = await client.get("/invoices")

        assert response.status_code == 200
        table = response.json()
        assert [group["customer_name"] for group in table["groups"]] == ["Acme Ltd", "Globex"]
        assert Decimal(table["groups"][0]["total_amount"]) == Decimal("300")
        assert table["row_count"] == 3

    @pytest.mark.asyncio
    async def test_filters_and_sort(self, client: AsyncClient):
        await client.get("/invoices")

        response = await client.put("/invoices/filters", json={"invoice_number": "in3"})
        assert response.status_code == 200
        assert (await client.get("/invoices")).json()["row_count"] == 1

        await client.delete("/invoices/filters")
        sort = (await client.post("/invoices/sort/customer_name")).json()
        assert sort == {"key": "customer_name", "direction": "desc"}
        groups = (await client.get("/invoices")).json()["groups"]
        assert groups[0]["customer_name"] == "Globex"

    @pytest.mark.asyncio
    async def test_unknown_sort_key_is_a_validation_error(self, client: AsyncClient):
        response = await client.post("/invoices/sort/colour")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_update_remark_persists_and_updates_state(self, client: AsyncClient, db_session):
        """
        Given: A loaded dashboard
        When: IN200 is marked paid
        Then: The remark is stored, and the open totals drop by its amount
        """
        # Arrange
        await client.post("/dashboard/refresh")

        # Act
        response = await client.patch(
            "/invoices/IN200/remark",
            json={"status": "paid", "text": "Paid by transfer"},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "paid"
        assert body["status_date"] is not None
        stored = await db_session.get(InvoiceRemarkDocument, "IN200")
        assert stored.text == "Paid by transfer"

        table = (await client.get("/invoices")).json()
        assert Decimal(table["open_amount"]) == Decimal("400")
        activity = (await client.get("/dashboard/recent-activity")).json()
        assert [item["invoice_number"] for item in activity] == ["IN200"]

    @pytest.mark.asyncio
    async def test_update_remark_invalid_status(self, client: AsyncClient):
        response = await client.patch("/invoices/IN200/remark", json={"status": "lost"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_payment_status_options(self, client: AsyncClient):
        options = (await client.get("/invoices/payment-statuses")).json()

        assert [option["value"] for option in options] == [
            "unpaid", "in_collection", "partially_paid", "paid", "cancelled"
        ]
        assert options[0]["label"] == "Unpaid"


class TestCustomersAndConfigAPI:

    @pytest.mark.asyncio
    async def test_customers_with_search(self, client: AsyncClient):
        response = await client.get("/customers", params={"search": "glob"})

        assert response.status_code == 200
        assert [c["customer_name"] for c in response.json()] == ["Globex"]

    @pytest.mark.asyncio
    async def test_customer_invoices_newest_first(self, client: AsyncClient):
        response = await client.get("/customers/Acme Ltd/invoices")

        assert [i["invoice_number"] for i in response.json()] == ["IN200", "IN100"]

    @pytest.mark.asyncio
    async def test_erp_config(self, client: AsyncClient):
        response = await client.get("/config/erp")

        assert response.status_code == 200
        assert response.json() == {"refresh_interval_ms": 60000}


class TestOpenAPISchema:

    @pytest.mark.asyncio
    async def test_state_response_remark_errors_are_typed(self, client: AsyncClient):
        schema = (await client.get("/openapi.json")).json()

        remark_errors = schema["components"]["schemas"]["DashboardStateResponse"]["properties"]["remark_errors"]
        assert remark_errors["type"] == "object"
        assert remark_errors["additionalProperties"] == {"type": "string"}
