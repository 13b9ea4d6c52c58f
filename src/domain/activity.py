"""Recent activity feed built from edited remarks"""

from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Mapping
from pydantic import BaseModel
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus

MAX_ACTIVITIES = 7


class ActivityType(str, Enum):
    REMARK = "remark"
    STATUS_CHANGE = "status_change"


class ActivityItem(BaseModel):
    invoice_number: str
    customer_name: str
    occurred_at: datetime
    type: ActivityType
    description: str
    status: PaymentStatus


def list_recent_activity(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
    limit: int = MAX_ACTIVITIES,
) -> List[ActivityItem]:
    """
    Most recent remark edits, newest first

    Synthesized default remarks have never been edited and are skipped, as
    are remarks whose invoice is not in the current invoice list.
    """
    by_number: Dict[str, Invoice] = {}
    for invoice in invoices:
        by_number.setdefault(invoice.invoice_number, invoice)

    items = []
    for invoice_id, remark in remarks.items():
        invoice = by_number.get(invoice_id)
        if invoice is None or remark.updated_at is None:
            continue
        if remark.text:
            activity_type, description = ActivityType.REMARK, remark.text
        else:
            activity_type = ActivityType.STATUS_CHANGE
            description = f"Status updated to: {remark.status.label}"
        items.append(
            ActivityItem(
                invoice_number=invoice.invoice_number,
                customer_name=invoice.customer_name,
                occurred_at=remark.updated_at,
                type=activity_type,
                description=description,
                status=remark.status,
            )
        )

    items.sort(key=lambda item: item.occurred_at, reverse=True)
    return items[:limit]
