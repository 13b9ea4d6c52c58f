"""Per-customer receivables summaries"""

from decimal import Decimal
from functools import cmp_to_key
from typing import Dict, Iterable, List, Mapping, Optional
from pydantic import BaseModel
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark
from src.domain.ordering import collation_key, compare, fold_text


class CustomerSummary(BaseModel):
    customer_name: str
    customer_code: str
    total_invoices: int = 0
    total_amount: Decimal = Decimal("0")
    unpaid_invoices: int = 0
    unpaid_amount: Decimal = Decimal("0")


def summarize_customers(
    invoices: Iterable[Invoice],
    remarks: Mapping[str, InvoiceRemark],
    search: Optional[str] = None,
) -> List[CustomerSummary]:
    """
    One summary per customer name, ordered by name

    Args:
        invoices: Full invoice list
        remarks: Remarks by invoice number (missing means unpaid)
        search: Optional case-insensitive substring of name or code

    Returns:
        Customer summaries
    """
    summaries: Dict[str, CustomerSummary] = {}
    for invoice in invoices:
        summary = summaries.get(invoice.customer_name)
        if summary is None:
            summary = CustomerSummary(
                customer_name=invoice.customer_name,
                customer_code=invoice.customer_code,
            )
            summaries[invoice.customer_name] = summary

        summary.total_invoices += 1
        summary.total_amount += invoice.amount

        remark = remarks.get(invoice.invoice_number)
        if remark is None or remark.is_open:
            summary.unpaid_invoices += 1
            summary.unpaid_amount += invoice.amount

    result = list(summaries.values())
    if search:
        term = fold_text(search)
        result = [
            summary for summary in result
            if term in fold_text(summary.customer_name) or term in fold_text(summary.customer_code)
        ]

    return sorted(result, key=lambda summary: collation_key(summary.customer_name))


def customer_invoices(invoices: Iterable[Invoice], customer_name: str) -> List[Invoice]:
    """A customer's invoices, newest invoice date first, undated ones last"""
    selected = [invoice for invoice in invoices if invoice.customer_name == customer_name]
    return sorted(
        selected,
        key=cmp_to_key(lambda a, b: compare(a.invoice_day, b.invoice_day, descending=True)),
    )
