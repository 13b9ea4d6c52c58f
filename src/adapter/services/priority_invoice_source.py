"""Priority ERP Invoice Source

Fetches open invoice lines from a Priority OData endpoint over HTTP.
"""

import base64
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional
import httpx
from libs.result import Result, Return, Error
from src.app.services.invoice_source import InvoiceSource
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)

# Invoice attribute -> Priority field
TEXT_FIELDS = {
    "customer_code": "ACCNAME",
    "customer_name": "ACCDES",
    "invoice_date": "CURDATE",
    "due_date": "FNCDATE",
    "invoice_number": "IVNUM",
    "payment_method": "FNCPATNAME",
    "invoice_flag": "INVOICEFLAG",
    "transaction_id": "FNCTRANS",
}


def _to_decimal(value: Any) -> Decimal:
    if not value or isinstance(value, bool):
        return Decimal("0")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0")
    return number if number.is_finite() else Decimal("0")


def _to_int(value: Any) -> int:
    number = _to_decimal(value)
    if number != number.to_integral_value():
        return 0
    return int(number)


def normalize_record(record: Mapping[str, Any]) -> Invoice:
    """
    Build an Invoice from one raw Priority record

    Missing or falsy text becomes "" and missing, falsy or unparseable
    numbers become 0, so no field of the result is ever None.
    """
    values = {
        attribute: str(record.get(field) or "")
        for attribute, field in TEXT_FIELDS.items()
    }
    values["amount"] = _to_decimal(record.get("SUM"))
    values["line_number"] = _to_int(record.get("KLINE"))
    return Invoice(**values)


class PriorityInvoiceSource(InvoiceSource):
    """
    Invoice source backed by the Priority OData API

    One GET per call with Basic authentication, no retries and no caching.
    """

    def __init__(
        self,
        url: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Priority invoice source

        Args:
            url: Full OData URL of the invoice form
            api_key: API user or personal access token
            api_secret: API password (Priority PATs use the literal "PAT")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.url = url
        self.api_key = api_key or ""
        self.api_secret = api_secret or ""
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        credentials = f"{self.api_key}:{self.api_secret}".encode("utf-8")
        return {
            "Authorization": "Basic " + base64.b64encode(credentials).decode("ascii"),
            "Accept": "application/json",
        }

    async def fetch_invoices(self) -> Result[List[Invoice]]:
        """
        Fetch and normalize all invoice lines

        Returns:
            Result[List[Invoice]]: Invoices in ERP order or error
        """
        if not self.url:
            return Return.err(
                Error(
                    code="ERP_NOT_CONFIGURED",
                    message="The ERP API URL is not configured",
                )
            )

        logger.info(f"Fetching open invoices from {self.url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"ERP request failed: {e}")
            return Return.err(
                Error(
                    code="ERP_FETCH_FAILED",
                    message=f"Failed to fetch or process invoice data: {e}",
                    reason=type(e).__name__,
                )
            )

        if not response.is_success:
            logger.error(f"ERP request failed with status {response.status_code}: {response.text}")
            return Return.err(
                Error(
                    code="ERP_HTTP_ERROR",
                    message=f"ERP request failed with status {response.status_code}",
                    reason=str(response.status_code),
                )
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"ERP returned an unreadable body: {e}")
            return Return.err(
                Error(
                    code="ERP_FETCH_FAILED",
                    message=f"Failed to fetch or process invoice data: {e}",
                    reason="invalid_json",
                )
            )

        records = payload.get("value") if isinstance(payload, dict) else None
        if not isinstance(records, list) or not all(isinstance(item, dict) for item in records):
            logger.error("ERP response does not contain the expected 'value' list")
            return Return.err(
                Error(
                    code="ERP_FORMAT_ERROR",
                    message="Received data from the ERP, but it is not in the expected format",
                )
            )

        invoices = [normalize_record(record) for record in records]
        logger.info(f"Fetched {len(invoices)} invoice lines from the ERP")
        return Return.ok(invoices)
