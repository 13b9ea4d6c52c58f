from .unit_of_work import SqlAlchemyUnitOfWork
from .priority_invoice_source import PriorityInvoiceSource, normalize_record

__all__ = [
    "SqlAlchemyUnitOfWork",
    "PriorityInvoiceSource",
    "normalize_record",
]
