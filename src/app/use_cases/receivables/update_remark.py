"""UpdateRemark Use Case

Merges a partial update onto an invoice's remark and persists the result.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_remark_repository import InvoiceRemarkRepository
from src.domain.base import utcnow
from src.domain.invoice_remark import InvoiceRemark
from .dtos import UpdateRemarkCommandDTO

logger = logging.getLogger(__name__)


class UpdateRemark:
    """
    Use Case: Update the remark of one invoice

    Business Rules:
    1. invoice_id is required; an empty id is rejected before any I/O
    2. Only supplied fields change; the rest keep their stored values
    3. A missing remark starts from the unpaid default
    4. Changing status without a status_date stamps status_date = now
    5. Concurrent updates of one invoice are last-write-wins

    Flow:
    1. Validate invoice_id
    2. Load stored remark (or synthesize default)
    3. Merge supplied fields, stamp updated_at
    4. Save and commit
    5. Return merged remark
    """

    def __init__(
        self,
        uow: UnitOfWork,
        remark_repo: InvoiceRemarkRepository,
    ):
        self.uow = uow
        self.remark_repo = remark_repo

    async def execute(self, command: UpdateRemarkCommandDTO) -> Result[InvoiceRemark]:
        """
        Execute remark update

        Args:
            command: UpdateRemarkCommandDTO with invoice_id and changed fields

        Returns:
            Result[InvoiceRemark]: Persisted remark or error
        """
        invoice_id = (command.invoice_id or "").strip()
        if not invoice_id:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Invoice ID is required to update a remark",
                )
            )

        try:
            now = utcnow()
            updates = command.updates()
            if "status" in updates and "status_date" not in updates:
                updates["status_date"] = now

            existing = await self.remark_repo.get_by_invoice_id(invoice_id)
            base = existing or InvoiceRemark.default_for(invoice_id, now)

            merged = base.model_copy(update={**updates, "invoice_id": invoice_id, "updated_at": now})
            saved = await self.remark_repo.save(merged)

            await self.uow.commit()

            logger.info(f"Updated remark for invoice {invoice_id}: {sorted(updates)}")
            return Return.ok(saved)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Error updating remark for invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="REMARK_UPDATE_FAILED",
                    message="Failed to save the remark. Please try again.",
                    reason=str(e),
                )
            )
