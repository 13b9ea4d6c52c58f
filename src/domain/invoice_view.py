"""Invoice table view

Pure, synchronous computation of the invoice table: rows are built from
invoices and remarks, filtered, sorted and grouped into contiguous customer
runs with subtotals. Nothing here performs I/O.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Mapping, Optional
from pydantic import BaseModel, Field
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus
from src.domain.ordering import collation_key, compare, fold_text, parse_day


class SortKey(str, Enum):
    """Sortable table columns"""
    CUSTOMER_NAME = "customer_name"
    CUSTOMER_CODE = "customer_code"
    INVOICE_NUMBER = "invoice_number"
    INVOICE_DATE = "invoice_date"
    DUE_DATE = "due_date"
    AMOUNT = "amount"
    PAYMENT_METHOD = "payment_method"
    LINE_NUMBER = "line_number"
    STATUS = "status"
    STATUS_DATE = "status_date"
    FOLLOW_UP_DATE = "follow_up_date"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


CUSTOMER_SORT_KEYS = frozenset({SortKey.CUSTOMER_NAME, SortKey.CUSTOMER_CODE})


class SortSpec(BaseModel):
    key: SortKey = SortKey.CUSTOMER_NAME
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


DEFAULT_SORT = SortSpec()


class InvoiceFilters(BaseModel):
    """
    Table filters

    Every field is optional; an empty field imposes no constraint and a row
    must satisfy all of the supplied ones.
    """

    customer_name: Optional[str] = Field(
        default=None,
        description="Substring of customer code or name (case-insensitive)"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        description="Substring of invoice number (case-insensitive)"
    )

    invoice_date_from: Optional[date] = None
    invoice_date_to: Optional[date] = None
    due_date_from: Optional[date] = None
    due_date_to: Optional[date] = None

    payment_statuses: Optional[List[PaymentStatus]] = Field(
        default=None,
        description="Keep rows whose remark status is one of these"
    )


class InvoiceRow(BaseModel):
    """An invoice line together with its remark"""

    invoice: Invoice
    remark: InvoiceRemark


class CustomerGroup(BaseModel):
    """Contiguous run of rows belonging to one customer"""

    customer_name: str
    customer_code: str
    rows: List[InvoiceRow]
    total_amount: Decimal
    total_count: int
    open_amount: Decimal
    open_count: int


class InvoiceTable(BaseModel):
    groups: List[CustomerGroup]
    row_count: int
    total_amount: Decimal
    open_amount: Decimal
    filters: InvoiceFilters
    sort: SortSpec


def build_rows(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
    now: Optional[datetime] = None,
) -> List[InvoiceRow]:
    """Pair each invoice with its remark, synthesizing defaults for missing ones"""
    rows = []
    for invoice in invoices:
        remark = remarks.get(invoice.invoice_number)
        if remark is None:
            remark = InvoiceRemark.default_for(invoice.invoice_number, now)
        rows.append(InvoiceRow(invoice=invoice, remark=remark))
    return rows


def _in_range(value: str, start: Optional[date], end: Optional[date]) -> bool:
    if start is None and end is None:
        return True
    day = parse_day(value)
    if day is None:
        return False
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def matches_filters(
    invoice: Invoice,
    filters: InvoiceFilters,
    status: PaymentStatus = PaymentStatus.UNPAID,
) -> bool:
    customer_term = fold_text((filters.customer_name or "").strip())
    if customer_term:
        if customer_term not in fold_text(invoice.customer_code) and customer_term not in fold_text(invoice.customer_name):
            return False

    number_term = fold_text((filters.invoice_number or "").strip())
    if number_term:
        if number_term not in fold_text(invoice.invoice_number):
            return False

    if not _in_range(invoice.invoice_date, filters.invoice_date_from, filters.invoice_date_to):
        return False

    if not _in_range(invoice.due_date, filters.due_date_from, filters.due_date_to):
        return False

    if filters.payment_statuses and status not in filters.payment_statuses:
        return False

    return True


def filter_invoices(
    invoices: Iterable[Invoice],
    filters: InvoiceFilters,
    remarks: Optional[Mapping[str, InvoiceRemark]] = None,
) -> List[Invoice]:
    """
    Keep the invoices satisfying every supplied filter

    Args:
        invoices: Invoices to filter (order is preserved)
        filters: Filter values; empty fields are ignored
        remarks: Remarks by invoice number, used by the status filter

    Returns:
        Matching invoices
    """
    remarks = remarks or {}
    result = []
    for invoice in invoices:
        remark = remarks.get(invoice.invoice_number)
        status = remark.status if remark is not None else PaymentStatus.UNPAID
        if matches_filters(invoice, filters, status):
            result.append(invoice)
    return result


def _sort_value(row: InvoiceRow, key: SortKey):
    invoice, remark = row.invoice, row.remark
    if key == SortKey.AMOUNT:
        return invoice.amount
    if key == SortKey.LINE_NUMBER:
        return invoice.line_number
    if key == SortKey.INVOICE_DATE:
        return invoice.invoice_day
    if key == SortKey.DUE_DATE:
        return invoice.due_day
    if key == SortKey.STATUS_DATE:
        return remark.status_date
    if key == SortKey.FOLLOW_UP_DATE:
        return remark.follow_up_date
    if key == SortKey.STATUS:
        return collation_key(remark.status.label)
    if key == SortKey.CUSTOMER_NAME:
        return (collation_key(invoice.customer_name), invoice.customer_name)
    return collation_key(getattr(invoice, key.value))


def _row_comparator(key: SortKey, descending: bool) -> Callable[[InvoiceRow, InvoiceRow], int]:
    def comparator(a: InvoiceRow, b: InvoiceRow) -> int:
        return compare(_sort_value(a, key), _sort_value(b, key), descending)
    return comparator


def sort_by_customer_open_amount(rows: List[InvoiceRow], descending: bool = False) -> List[InvoiceRow]:
    """
    Order customer groups by open-amount subtotal, rows by their own amount

    Groups are ranked by the sum of their open rows' amounts; within a group
    rows are ranked by amount. Both levels follow the requested direction and
    ties keep their input order.
    """
    members: Dict[str, List[InvoiceRow]] = {}
    subtotals: Dict[str, Decimal] = {}
    for row in rows:
        name = row.invoice.customer_name
        if name not in members:
            members[name] = []
            subtotals[name] = Decimal("0")
        members[name].append(row)
        if row.remark.is_open:
            subtotals[name] += row.invoice.amount

    group_order = sorted(
        members,
        key=cmp_to_key(lambda a, b: compare(subtotals[a], subtotals[b], descending)),
    )
    by_amount = cmp_to_key(_row_comparator(SortKey.AMOUNT, descending))

    result = []
    for name in group_order:
        result.extend(sorted(members[name], key=by_amount))
    return result


def sort_invoice_rows(rows: Iterable[InvoiceRow], sort: SortSpec = DEFAULT_SORT) -> List[InvoiceRow]:
    """
    Stable sort of table rows

    Customer keys sort directly. Amount uses sort_by_customer_open_amount.
    Any other key is applied within customer-name order so that rows of one
    customer stay contiguous.
    """
    rows = list(rows)

    if sort.key == SortKey.AMOUNT:
        return sort_by_customer_open_amount(rows, sort.descending)

    ordered = sorted(rows, key=cmp_to_key(_row_comparator(sort.key, sort.descending)))
    if sort.key in CUSTOMER_SORT_KEYS:
        return ordered

    # raw name breaks collation ties so differently-cased names never interleave
    return sorted(
        ordered,
        key=lambda row: (collation_key(row.invoice.customer_name), row.invoice.customer_name),
    )


def group_by_customer(rows: Iterable[InvoiceRow]) -> List[CustomerGroup]:
    """Split sorted rows into consecutive same-customer runs with subtotals"""
    groups: List[CustomerGroup] = []
    current: List[InvoiceRow] = []

    def close_group():
        if not current:
            return
        open_rows = [row for row in current if row.remark.is_open]
        groups.append(
            CustomerGroup(
                customer_name=current[0].invoice.customer_name,
                customer_code=current[0].invoice.customer_code,
                rows=list(current),
                total_amount=sum((row.invoice.amount for row in current), Decimal("0")),
                total_count=len(current),
                open_amount=sum((row.invoice.amount for row in open_rows), Decimal("0")),
                open_count=len(open_rows),
            )
        )

    for row in rows:
        if current and row.invoice.customer_name != current[0].invoice.customer_name:
            close_group()
            current = []
        current.append(row)
    close_group()

    return groups


def build_invoice_table(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
    filters: Optional[InvoiceFilters] = None,
    sort: Optional[SortSpec] = None,
    now: Optional[datetime] = None,
) -> InvoiceTable:
    """
    Filter, sort and group invoices into the table view

    Args:
        invoices: Full invoice list
        remarks: Remarks by invoice number
        filters: Active filters (none by default)
        sort: Active sort (customer name ascending by default)
        now: Timestamp for synthesized default remarks

    Returns:
        InvoiceTable with customer groups and overall totals
    """
    filters = filters or InvoiceFilters()
    sort = sort or DEFAULT_SORT

    visible = filter_invoices(invoices, filters, remarks)
    rows = sort_invoice_rows(build_rows(visible, remarks, now), sort)
    groups = group_by_customer(rows)

    return InvoiceTable(
        groups=groups,
        row_count=len(rows),
        total_amount=sum((group.total_amount for group in groups), Decimal("0")),
        open_amount=sum((group.open_amount for group in groups), Decimal("0")),
        filters=filters,
        sort=sort,
    )
