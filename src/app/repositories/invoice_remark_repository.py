"""Invoice Remark Repository Interface

Defines the contract for remark persistence. The store holds one document
per invoice number; there is no transaction spanning several invoices.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional
from src.domain.invoice_remark import InvoiceRemark


class InvoiceRemarkRepository(ABC):
    """
    Repository interface for InvoiceRemark persistence

    Document-style access: get by id and whole-document upsert.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> Optional[InvoiceRemark]:
        """
        Retrieve the stored remark for an invoice

        Args:
            invoice_id: Invoice number

        Returns:
            InvoiceRemark if stored, None otherwise
        """
        pass

    @abstractmethod
    async def get_many(self, invoice_ids: Iterable[str]) -> Dict[str, InvoiceRemark]:
        """
        Retrieve stored remarks for several invoices

        Args:
            invoice_ids: Invoice numbers

        Returns:
            Stored remarks keyed by invoice number (missing ids are absent)
        """
        pass

    @abstractmethod
    async def save(self, remark: InvoiceRemark) -> InvoiceRemark:
        """
        Insert or replace the remark document for remark.invoice_id

        Args:
            remark: Fully merged remark

        Returns:
            Remark as stored
        """
        pass
