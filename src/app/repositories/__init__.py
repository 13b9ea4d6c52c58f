from .invoice_remark_repository import InvoiceRemarkRepository

__all__ = [
    "InvoiceRemarkRepository",
]
