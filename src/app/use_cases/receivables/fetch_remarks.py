"""FetchRemarks Use Case

Resolves the remark of every invoice in a list, synthesizing the default
remark where none is stored.
"""

import logging
from typing import Dict, Iterable
from libs.result import Result, Return, Error
from src.app.repositories.invoice_remark_repository import InvoiceRemarkRepository
from src.domain.base import utcnow
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark

logger = logging.getLogger(__name__)


class FetchRemarks:
    """
    Use Case: Fetch remarks for a set of invoices

    Business Rules:
    1. One remark per distinct invoice number
    2. Missing remarks become an unpaid default stamped with the load time
    3. Synthesized defaults are not persisted
    """

    def __init__(self, remark_repo: InvoiceRemarkRepository):
        self.remark_repo = remark_repo

    async def execute(self, invoices: Iterable[Invoice]) -> Result[Dict[str, InvoiceRemark]]:
        """
        Execute remark lookup

        Args:
            invoices: Invoices whose remarks are needed

        Returns:
            Result[Dict[str, InvoiceRemark]]: Remark per invoice number or error
        """
        invoice_ids = list(dict.fromkeys(invoice.invoice_number for invoice in invoices))
        if not invoice_ids:
            return Return.ok({})

        try:
            stored = await self.remark_repo.get_many(invoice_ids)
        except Exception as e:
            logger.error(f"Failed to fetch remarks for {len(invoice_ids)} invoices: {e}")
            return Return.err(
                Error(
                    code="REMARKS_FETCH_FAILED",
                    message="Failed to load invoice remarks",
                    reason=str(e),
                )
            )

        now = utcnow()
        remarks = {}
        for invoice_id in invoice_ids:
            remarks[invoice_id] = stored.get(invoice_id) or InvoiceRemark.default_for(invoice_id, now)

        logger.info(
            f"Resolved {len(remarks)} remarks ({len(remarks) - len(stored)} synthesized defaults)"
        )
        return Return.ok(remarks)
