"""Invoice Remark Domain Entity

Payment-status annotation layered onto an invoice by invoice number.
One remark per invoice; remarks are merged on update and never deleted.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field
from src.domain.base import BaseModel, utcnow

REMARKS_COLLECTION = "invoice_remarks"


class PaymentStatus(str, Enum):
    """Payment status of an invoice"""
    UNPAID = "unpaid"
    IN_COLLECTION = "in_collection"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    CANCELLED = "cancelled"

    @property
    def is_open(self) -> bool:
        return self not in CLOSED_STATUSES

    @property
    def label(self) -> str:
        return PAYMENT_STATUS_LABELS[self]


CLOSED_STATUSES = frozenset({PaymentStatus.PAID, PaymentStatus.CANCELLED})

PAYMENT_STATUS_LABELS = {
    PaymentStatus.UNPAID: "Unpaid",
    PaymentStatus.IN_COLLECTION: "In collection",
    PaymentStatus.PARTIALLY_PAID: "Partially paid",
    PaymentStatus.PAID: "Paid",
    PaymentStatus.CANCELLED: "Cancelled",
}

# Badge variants used by dashboards to render each status
PAYMENT_STATUS_BADGES = {
    PaymentStatus.UNPAID: "destructive",
    PaymentStatus.IN_COLLECTION: "outline",
    PaymentStatus.PARTIALLY_PAID: "default",
    PaymentStatus.PAID: "default",
    PaymentStatus.CANCELLED: "secondary",
}


class InvoiceRemark(BaseModel):
    """
    Invoice Remark - mutable payment annotation

    Domain Rules:
    - invoice_id equals the invoice number it annotates
    - A missing remark is never "no status": default_for() synthesizes an
      unpaid remark stamped with the current time
    - updated_at is only set once the remark has been persisted by an edit
    """

    invoice_id: str = Field(
        description="Invoice number this remark belongs to"
    )

    status: PaymentStatus = Field(
        default=PaymentStatus.UNPAID,
        description="Payment status"
    )

    text: str = Field(
        default="",
        description="Free-text note"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        description="When the remark was created"
    )

    status_date: Optional[datetime] = Field(
        default=None,
        description="When the current status was set"
    )

    follow_up_date: Optional[datetime] = Field(
        default=None,
        description="Optional follow-up date"
    )

    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last persisted edit (None for a synthesized default)"
    )

    @property
    def is_open(self) -> bool:
        return self.status.is_open

    @classmethod
    def default_for(cls, invoice_id: str, now: Optional[datetime] = None) -> "InvoiceRemark":
        """
        Synthesize the default remark for an invoice without one

        Args:
            invoice_id: Invoice number
            now: Timestamp for created_at and status_date (defaults to now)

        Returns:
            Unpaid remark, not persisted
        """
        now = now or utcnow()
        return cls(
            invoice_id=invoice_id,
            status=PaymentStatus.UNPAID,
            text="",
            created_at=now,
            status_date=now,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "IN240001",
                "status": "in_collection",
                "text": "Customer promised payment next week",
                "created_at": "2024-02-01T09:30:00",
                "status_date": "2024-02-10T14:00:00",
                "follow_up_date": "2024-02-17T00:00:00",
                "updated_at": "2024-02-10T14:00:00"
            }
        }


class InvoiceRemarkDocument(InvoiceRemark, table=True):
    """Stored form of a remark: one row per invoice number"""

    __tablename__ = REMARKS_COLLECTION

    invoice_id: str = Field(
        primary_key=True,
        max_length=64,
        description="Invoice number (document id)"
    )

    def to_remark(self) -> InvoiceRemark:
        return InvoiceRemark.model_validate(self.model_dump())
