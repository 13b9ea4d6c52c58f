"""Dashboard Controller

Owns the single DashboardState and drives it through load, filter, sort
and remark-edit events. Use cases are passed in per call so the controller
never holds a database session.
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from libs.result import Result, Return, Error
from src.app.state import dashboard_state as transitions
from src.app.state.dashboard_state import DashboardState, LoadStatus
from src.app.use_cases.receivables.dtos import DashboardDataDTO, UpdateRemarkCommandDTO
from src.app.use_cases.receivables.load_dashboard_data import LoadDashboardData
from src.app.use_cases.receivables.update_remark import UpdateRemark
from src.domain.activity import ActivityItem, list_recent_activity
from src.domain.base import utcnow
from src.domain.customer_summary import CustomerSummary, customer_invoices, summarize_customers
from src.domain.dashboard_metrics import (
    DashboardMetrics,
    OverdueBucket,
    compute_dashboard_metrics,
    compute_overdue_buckets,
)
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark
from src.domain.invoice_view import InvoiceFilters, InvoiceTable, SortKey, build_invoice_table

logger = logging.getLogger(__name__)


class DashboardController:
    """
    Single owner of the dashboard state

    Loads are not cancelled when superseded: whichever load resolves last
    writes the state. Edits of different invoices may be in flight at the
    same time; each invoice tracks its own sync status.

    Usage:
        controller = DashboardController()
        await controller.load(LoadDashboardData(source, FetchRemarks(repo), GetErpConfig()))
        table = controller.invoice_table()
        await controller.update_remark(command, UpdateRemark(uow, repo))
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utcnow,
        today: Callable[[], date] = date.today,
    ):
        self.state = DashboardState()
        self._clock = clock
        self._today = today

    async def load(self, loader: LoadDashboardData) -> Result[DashboardDataDTO]:
        """
        Run a load and record its outcome in the state

        Args:
            loader: LoadDashboardData wired to this request's resources

        Returns:
            The loader's Result
        """
        self.state = transitions.start_load(self.state)
        result = await loader.execute()

        if result.is_err():
            logger.error(f"Dashboard load failed: {result.error.code} - {result.error.message}")
            self.state = transitions.load_failed(self.state, result.error.message)
        else:
            self.state = transitions.load_succeeded(self.state, result.value)
        return result

    async def ensure_loaded(self, loader: LoadDashboardData) -> None:
        """Run the first load if nothing has been loaded yet"""
        if self.state.load_status == LoadStatus.IDLE:
            await self.load(loader)

    async def update_remark(
        self,
        command: UpdateRemarkCommandDTO,
        updater: UpdateRemark,
    ) -> Result[InvoiceRemark]:
        """
        Edit a remark with an optimistic local update

        Flow:
        1. Reject an empty invoice id
        2. Stamp status_date when the status changes
        3. Show the edit at once (pending)
        4. Persist through UpdateRemark
        5. Confirm with the stored value, or roll back and keep the error

        Args:
            command: Partial update
            updater: UpdateRemark wired to this request's session

        Returns:
            Result[InvoiceRemark]: Stored remark or error
        """
        invoice_id = (command.invoice_id or "").strip()
        if not invoice_id:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Invoice ID is required to update a remark",
                )
            )

        now = self._clock()
        updates = command.updates()
        if "status" in updates and "status_date" not in updates:
            updates["status_date"] = now

        self.state = transitions.begin_remark_edit(self.state, invoice_id, updates, now)

        result = await updater.execute(
            UpdateRemarkCommandDTO(invoice_id=invoice_id, **updates)
        )

        if result.is_ok():
            self.state = transitions.confirm_remark_edit(self.state, invoice_id, result.value)
        else:
            logger.warning(
                f"Rolling back remark edit for invoice {invoice_id}: {result.error.message}"
            )
            self.state = transitions.fail_remark_edit(
                self.state, invoice_id, result.error.message, self._clock()
            )
        return result

    def set_filters(self, filters: InvoiceFilters) -> DashboardState:
        self.state = transitions.apply_filters(self.state, filters)
        return self.state

    def clear_filters(self) -> DashboardState:
        self.state = transitions.clear_filters(self.state)
        return self.state

    def sort_by(self, key: SortKey) -> DashboardState:
        self.state = transitions.toggle_sort(self.state, key)
        return self.state

    def invoice_table(self) -> InvoiceTable:
        return build_invoice_table(
            self.state.invoices,
            self.state.remark_map(),
            self.state.filters,
            self.state.sort,
            self._clock(),
        )

    def metrics(self) -> DashboardMetrics:
        return compute_dashboard_metrics(self.state.invoices, self.state.remark_map(), self._today())

    def overdue_buckets(self) -> List[OverdueBucket]:
        return compute_overdue_buckets(self.state.invoices, self.state.remark_map(), self._today())

    def recent_activity(self) -> List[ActivityItem]:
        return list_recent_activity(self.state.invoices, self.state.remark_map())

    def customers(self, search: Optional[str] = None) -> List[CustomerSummary]:
        return summarize_customers(self.state.invoices, self.state.remark_map(), search)

    def customer_invoices(self, customer_name: str) -> List[Invoice]:
        return customer_invoices(self.state.invoices, customer_name)
