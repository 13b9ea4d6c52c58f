"""SQLAlchemy Invoice Remark Repository Implementation

Stores each remark as one row of the invoice_remarks table keyed by
invoice number.
"""

from typing import Dict, Iterable, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_remark_repository import InvoiceRemarkRepository
from src.domain.invoice_remark import InvoiceRemark, InvoiceRemarkDocument


class SqlAlchemyInvoiceRemarkRepository(InvoiceRemarkRepository):
    """
    SQLAlchemy implementation of InvoiceRemarkRepository

    Writes are flushed but not committed; the unit of work commits.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> Optional[InvoiceRemark]:
        document = await self.session.get(InvoiceRemarkDocument, invoice_id)
        return document.to_remark() if document is not None else None

    async def get_many(self, invoice_ids: Iterable[str]) -> Dict[str, InvoiceRemark]:
        """
        Retrieve stored remarks in one query

        Args:
            invoice_ids: Invoice numbers

        Returns:
            Stored remarks keyed by invoice number
        """
        ids = list(dict.fromkeys(invoice_ids))
        if not ids:
            return {}

        statement = select(InvoiceRemarkDocument).where(InvoiceRemarkDocument.invoice_id.in_(ids))
        result = await self.session.execute(statement)
        return {document.invoice_id: document.to_remark() for document in result.scalars().all()}

    async def save(self, remark: InvoiceRemark) -> InvoiceRemark:
        """
        Upsert the remark document

        Args:
            remark: Fully merged remark

        Returns:
            Remark as stored
        """
        values = remark.model_dump()
        document = await self.session.get(InvoiceRemarkDocument, remark.invoice_id)

        if document is None:
            document = InvoiceRemarkDocument(**values)
        else:
            document.sqlmodel_update(values)

        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document.to_remark()
