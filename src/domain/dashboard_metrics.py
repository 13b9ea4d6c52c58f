"""Dashboard Metrics

Receivables figures computed over the full, unfiltered invoice list. Only
open invoices (status neither paid nor cancelled) count towards the open,
overdue and due-this-week totals.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Tuple
from pydantic import BaseModel
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus

# (label, first day, last day); None means unbounded
OVERDUE_BUCKET_RANGES: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("1-30 days", 1, 30),
    ("31-60 days", 31, 60),
    ("61-90 days", 61, 90),
    ("90+ days", 91, None),
)


class DashboardMetrics(BaseModel):
    total_open_count: int = 0
    total_open_amount: Decimal = Decimal("0")
    overdue_count: int = 0
    overdue_amount: Decimal = Decimal("0")
    due_this_week_count: int = 0
    due_this_week_amount: Decimal = Decimal("0")
    average_payment_days: Optional[float] = None


class OverdueBucket(BaseModel):
    label: str
    min_days: int
    max_days: Optional[int]
    total_amount: Decimal = Decimal("0")
    count: int = 0

    def accepts(self, days_overdue: int) -> bool:
        if days_overdue < self.min_days:
            return False
        return self.max_days is None or days_overdue <= self.max_days


def week_bounds(today: date) -> Tuple[date, date]:
    """Sunday-to-Saturday week containing today"""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def days_overdue(invoice: Invoice, today: date) -> Optional[int]:
    """Whole days past the due date, or None when the due date is unparseable"""
    due = invoice.due_day
    if due is None:
        return None
    return (today - due).days


def _is_open(invoice: Invoice, remarks: Mapping[str, InvoiceRemark]) -> bool:
    remark = remarks.get(invoice.invoice_number)
    return remark is None or remark.is_open


def open_invoices(invoices: Iterable[Invoice], remarks: Mapping[str, InvoiceRemark]) -> List[Invoice]:
    return [invoice for invoice in invoices if _is_open(invoice, remarks)]


def average_payment_days(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
) -> Optional[float]:
    """Mean days from invoice date to the paid status date, over paid invoices"""
    spans = []
    for invoice in invoices:
        remark = remarks.get(invoice.invoice_number)
        if remark is None or remark.status != PaymentStatus.PAID or remark.status_date is None:
            continue
        issued = invoice.invoice_day
        if issued is None:
            continue
        spans.append((remark.status_date.date() - issued).days)
    if not spans:
        return None
    return round(sum(spans) / len(spans), 1)


def compute_dashboard_metrics(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
    today: Optional[date] = None,
) -> DashboardMetrics:
    """
    Compute the dashboard's headline figures

    Args:
        invoices: Full invoice list
        remarks: Remarks by invoice number (missing means unpaid)
        today: Reference day in local time (defaults to date.today())

    Returns:
        DashboardMetrics
    """
    today = today or date.today()
    invoices = list(invoices)
    _, week_end = week_bounds(today)
    metrics = DashboardMetrics()

    for invoice in open_invoices(invoices, remarks):
        metrics.total_open_count += 1
        metrics.total_open_amount += invoice.amount

        overdue_by = days_overdue(invoice, today)
        if overdue_by is None:
            continue

        if overdue_by > 0:
            metrics.overdue_count += 1
            metrics.overdue_amount += invoice.amount
        elif invoice.due_day <= week_end:
            metrics.due_this_week_count += 1
            metrics.due_this_week_amount += invoice.amount

    metrics.average_payment_days = average_payment_days(invoices, remarks)
    return metrics


def compute_overdue_buckets(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
    today: Optional[date] = None,
) -> List[OverdueBucket]:
    """
    Histogram overdue open amounts by age

    Always returns the four buckets in order, empty ones included.
    """
    today = today or date.today()
    buckets = [
        OverdueBucket(label=label, min_days=low, max_days=high)
        for label, low, high in OVERDUE_BUCKET_RANGES
    ]

    for invoice in open_invoices(invoices, remarks):
        overdue_by = days_overdue(invoice, today)
        if overdue_by is None or overdue_by < 1:
            continue
        for bucket in buckets:
            if bucket.accepts(overdue_by):
                bucket.total_amount += invoice.amount
                bucket.count += 1
                break

    return buckets
