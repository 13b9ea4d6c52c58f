from .unit_of_work import UnitOfWork
from .invoice_source import InvoiceSource

__all__ = [
    "UnitOfWork",
    "InvoiceSource",
]
