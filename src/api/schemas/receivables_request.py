"""Request and response schemas for the Receivables API

Pydantic models for validating incoming HTTP requests and shaping the
dashboard state response.
"""

from datetime import date, datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.app.use_cases.receivables.dtos import ErpConfigDTO, UpdateRemarkCommandDTO
from src.domain.invoice_remark import PaymentStatus, PAYMENT_STATUS_BADGES
from src.domain.invoice_view import InvoiceFilters, SortSpec


class RemarkUpdateSchema(BaseModel):
    """
    Request schema for a partial remark update

    Used for PATCH /invoices/{invoice_id}/remark. Omitted fields keep their
    stored values; null clears status_date or follow_up_date.
    """

    status: Optional[PaymentStatus] = Field(
        default=None,
        description="New payment status"
    )

    text: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Free-text note"
    )

    status_date: Optional[datetime] = Field(
        default=None,
        description="When the status was set (defaults to now on a status change)"
    )

    follow_up_date: Optional[datetime] = Field(
        default=None,
        description="Follow-up date"
    )

    def to_command(self, invoice_id: str) -> UpdateRemarkCommandDTO:
        supplied = self.model_dump(exclude_unset=True)
        return UpdateRemarkCommandDTO(invoice_id=invoice_id, **supplied)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "in_collection",
                "text": "Reminder sent, promised payment on Friday",
                "follow_up_date": "2024-02-16T00:00:00"
            }
        }


class FiltersSchema(BaseModel):
    """
    Request schema for the invoice table filters

    Used for PUT /invoices/filters. Blank text fields count as absent.
    """

    customer_name: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_date_from: Optional[date] = None
    invoice_date_to: Optional[date] = None
    due_date_from: Optional[date] = None
    due_date_to: Optional[date] = None
    payment_statuses: Optional[List[PaymentStatus]] = None

    @field_validator("customer_name", "invoice_number")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def to_filters(self) -> InvoiceFilters:
        return InvoiceFilters(**self.model_dump())

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "acme",
                "due_date_to": "2024-03-31",
                "payment_statuses": ["unpaid", "in_collection"]
            }
        }


class PaymentStatusOption(BaseModel):
    value: PaymentStatus
    label: str
    badge: str

    @classmethod
    def for_status(cls, status: PaymentStatus) -> "PaymentStatusOption":
        return cls(value=status, label=status.label, badge=PAYMENT_STATUS_BADGES[status])


class DashboardStateResponse(BaseModel):
    """Summary of the controller state (GET /dashboard/state)"""

    load_status: str
    error: Optional[str] = None
    loaded_at: Optional[datetime] = None
    invoice_count: int
    remark_count: int
    updating_invoice_ids: List[str]
    remark_errors: Dict[str, str] = Field(
        default_factory=dict,
        description="Invoice number -> message of the last failed edit"
    )
    erp_config: Optional[ErpConfigDTO] = None
    filters: InvoiceFilters
    sort: SortSpec
