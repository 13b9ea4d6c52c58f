"""Invoice Domain Model

One invoice line as reported by the Priority ERP. Invoices are fetched fresh
on every load and never persisted or mutated locally.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field
from src.domain.base import BaseModel
from src.domain.ordering import parse_day


class Invoice(BaseModel):
    """
    Invoice - read-only ERP invoice line

    Domain Rules:
    - Identity is (invoice_number, line_number); an invoice may have many lines
    - Every field is populated: missing text is "", missing numbers are 0
    - Dates keep the ERP's ISO string form and are parsed at day granularity
    """

    customer_code: str = Field(
        default="",
        description="Customer account code (ERP: ACCNAME)"
    )

    customer_name: str = Field(
        default="",
        description="Customer display name (ERP: ACCDES)"
    )

    invoice_date: str = Field(
        default="",
        description="Invoice date as ISO string (ERP: CURDATE)"
    )

    due_date: str = Field(
        default="",
        description="Payment due date as ISO string (ERP: FNCDATE)"
    )

    invoice_number: str = Field(
        default="",
        description="Invoice number (ERP: IVNUM)"
    )

    amount: Decimal = Field(
        default=Decimal("0"),
        description="Line amount (ERP: SUM)"
    )

    payment_method: str = Field(
        default="",
        description="Payment method name (ERP: FNCPATNAME)"
    )

    invoice_flag: str = Field(
        default="",
        description="Invoice flag (ERP: INVOICEFLAG)"
    )

    transaction_id: str = Field(
        default="",
        description="Financial transaction id (ERP: FNCTRANS)"
    )

    line_number: int = Field(
        default=0,
        description="Line number within the invoice (ERP: KLINE)"
    )

    @property
    def invoice_day(self) -> Optional[date]:
        return parse_day(self.invoice_date)

    @property
    def due_day(self) -> Optional[date]:
        return parse_day(self.due_date)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_code": "C1001",
                "customer_name": "Acme Ltd",
                "invoice_date": "2024-01-05T00:00:00",
                "due_date": "2024-02-04T00:00:00",
                "invoice_number": "IN240001",
                "amount": "1170.00",
                "payment_method": "Bank transfer",
                "invoice_flag": "Y",
                "transaction_id": "88231",
                "line_number": 1
            }
        }
