"""Data Transfer Objects for Receivables Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus

REMARK_UPDATE_FIELDS = ("status", "text", "status_date", "follow_up_date")


class UpdateRemarkCommandDTO(BaseModel):
    """
    Command DTO for a partial remark update

    Only fields explicitly set on the command are applied; an explicit None
    clears status_date or follow_up_date.
    """

    invoice_id: str = Field(
        ...,
        description="Invoice number whose remark is updated"
    )

    status: Optional[PaymentStatus] = Field(
        default=None,
        description="New payment status"
    )

    text: Optional[str] = Field(
        default=None,
        description="New free-text note"
    )

    status_date: Optional[datetime] = Field(
        default=None,
        description="When the status was set (stamped automatically on status change)"
    )

    follow_up_date: Optional[datetime] = Field(
        default=None,
        description="Follow-up date"
    )

    def updates(self) -> Dict[str, Any]:
        """Fields explicitly supplied on this command"""
        supplied = self.model_dump(include=set(REMARK_UPDATE_FIELDS), exclude_unset=True)
        if supplied.get("status") is None:
            supplied.pop("status", None)
        if supplied.get("text") is None:
            supplied.pop("text", None)
        return supplied

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "IN240001",
                "status": "paid",
                "text": "Paid by bank transfer"
            }
        }


class ErpConfigDTO(BaseModel):
    """Advisory ERP settings shown to dashboards"""

    refresh_interval_ms: int = Field(
        default=60000,
        description="Suggested refresh interval in milliseconds (advisory only)"
    )


class DashboardDataDTO(BaseModel):
    """
    Response DTO for a dashboard load

    Returned by LoadDashboardData.
    """

    invoices: List[Invoice] = Field(
        default_factory=list,
        description="Invoice lines from the ERP"
    )

    remarks: Dict[str, InvoiceRemark] = Field(
        default_factory=dict,
        description="Remark per invoice number (stored or synthesized default)"
    )

    erp_config: ErpConfigDTO = Field(
        default_factory=ErpConfigDTO,
        description="Advisory ERP settings"
    )

    loaded_at: datetime = Field(
        ...,
        description="When the load completed"
    )
