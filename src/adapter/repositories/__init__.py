from .invoice_remark_repository import SqlAlchemyInvoiceRemarkRepository

__all__ = [
    "SqlAlchemyInvoiceRemarkRepository",
]
