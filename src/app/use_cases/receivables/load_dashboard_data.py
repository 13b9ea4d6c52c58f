"""LoadDashboardData Use Case

Runs one dashboard load: invoices, then remarks, then ERP settings.
"""

import logging
from libs.result import Result, Return
from src.app.services.invoice_source import InvoiceSource
from src.domain.base import utcnow
from .dtos import DashboardDataDTO
from .fetch_remarks import FetchRemarks
from .get_erp_config import GetErpConfig

logger = logging.getLogger(__name__)


class LoadDashboardData:
    """
    Use Case: Load everything the dashboard shows

    Business Rules:
    1. Steps run one after another, never in parallel
    2. The first failing step aborts the load and its error is returned
    3. Remarks are only fetched when there are invoices

    Flow:
    1. Fetch invoices from the ERP
    2. Fetch (or synthesize) remarks
    3. Fetch advisory ERP settings
    4. Return DashboardDataDTO
    """

    def __init__(
        self,
        invoice_source: InvoiceSource,
        fetch_remarks: FetchRemarks,
        get_erp_config: GetErpConfig,
    ):
        self.invoice_source = invoice_source
        self.fetch_remarks = fetch_remarks
        self.get_erp_config = get_erp_config

    async def execute(self) -> Result[DashboardDataDTO]:
        """
        Execute dashboard load

        Returns:
            Result[DashboardDataDTO]: Loaded data or the first step's error
        """
        # Step 1: Invoices
        invoices_result = await self.invoice_source.fetch_invoices()
        if invoices_result.is_err():
            logger.error(f"Dashboard load aborted at invoices: {invoices_result.error.message}")
            return invoices_result
        invoices = invoices_result.value or []

        # Step 2: Remarks
        remarks = {}
        if invoices:
            remarks_result = await self.fetch_remarks.execute(invoices)
            if remarks_result.is_err():
                logger.error(f"Dashboard load aborted at remarks: {remarks_result.error.message}")
                return remarks_result
            remarks = remarks_result.value

        # Step 3: ERP settings
        config_result = await self.get_erp_config.execute()
        if config_result.is_err():
            logger.error(f"Dashboard load aborted at config: {config_result.error.message}")
            return config_result

        logger.info(f"Dashboard load complete: {len(invoices)} invoices, {len(remarks)} remarks")
        return Return.ok(
            DashboardDataDTO(
                invoices=invoices,
                remarks=remarks,
                erp_config=config_result.value,
                loaded_at=utcnow(),
            )
        )
