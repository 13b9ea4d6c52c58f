from .base import BaseModel, utcnow
from .invoice import Invoice
from .invoice_remark import (
    InvoiceRemark,
    InvoiceRemarkDocument,
    PaymentStatus,
    PAYMENT_STATUS_BADGES,
    REMARKS_COLLECTION,
)
from .invoice_view import (
    CustomerGroup,
    InvoiceFilters,
    InvoiceRow,
    InvoiceTable,
    SortDirection,
    SortKey,
    SortSpec,
    build_invoice_table,
)
from .dashboard_metrics import DashboardMetrics, OverdueBucket
from .activity import ActivityItem, ActivityType
from .customer_summary import CustomerSummary

__all__ = [
    "BaseModel",
    "utcnow",
    "Invoice",
    "InvoiceRemark",
    "InvoiceRemarkDocument",
    "PaymentStatus",
    "PAYMENT_STATUS_BADGES",
    "REMARKS_COLLECTION",
    "CustomerGroup",
    "InvoiceFilters",
    "InvoiceRow",
    "InvoiceTable",
    "SortDirection",
    "SortKey",
    "SortSpec",
    "build_invoice_table",
    "DashboardMetrics",
    "OverdueBucket",
    "ActivityItem",
    "ActivityType",
    "CustomerSummary",
]
