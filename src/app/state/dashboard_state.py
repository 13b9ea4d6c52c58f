"""Dashboard State

Serializable application state for the dashboard and the pure transitions
that move it between load, filter, sort and remark-edit events. Every
transition returns a new state and leaves its input untouched.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set
from pydantic import BaseModel, Field

from src.app.use_cases.receivables.dtos import DashboardDataDTO, ErpConfigDTO
from src.domain.base import utcnow
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemark
from src.domain.invoice_view import DEFAULT_SORT, InvoiceFilters, SortDirection, SortKey, SortSpec


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class RemarkSyncStatus(str, Enum):
    """Sync state of one invoice's remark against the store"""
    CLEAN = "clean"
    PENDING = "pending"
    ERROR = "error"


class RemarkEntry(BaseModel):
    """
    A remark as shown, plus what to restore if its pending edit fails

    clean:   remark matches the store
    pending: remark holds an optimistic edit; previous is the last confirmed value
    error:   the last edit failed and was rolled back; error_message says why
    """

    remark: InvoiceRemark
    sync_status: RemarkSyncStatus = RemarkSyncStatus.CLEAN
    previous: Optional[InvoiceRemark] = None
    error_message: Optional[str] = None


class DashboardState(BaseModel):
    invoices: List[Invoice] = Field(default_factory=list)
    remarks: Dict[str, RemarkEntry] = Field(default_factory=dict)
    erp_config: Optional[ErpConfigDTO] = None
    filters: InvoiceFilters = Field(default_factory=InvoiceFilters)
    sort: SortSpec = Field(default_factory=lambda: DEFAULT_SORT.model_copy())
    load_status: LoadStatus = LoadStatus.IDLE
    error: Optional[str] = None
    loaded_at: Optional[datetime] = None

    def remark_map(self) -> Dict[str, InvoiceRemark]:
        return {invoice_id: entry.remark for invoice_id, entry in self.remarks.items()}

    def updating_invoice_ids(self) -> Set[str]:
        return {
            invoice_id for invoice_id, entry in self.remarks.items()
            if entry.sync_status == RemarkSyncStatus.PENDING
        }


def start_load(state: DashboardState) -> DashboardState:
    return state.model_copy(update={"load_status": LoadStatus.LOADING, "error": None})


def load_succeeded(state: DashboardState, data: DashboardDataDTO) -> DashboardState:
    """Replace invoices and remarks with freshly loaded data"""
    remarks = {
        invoice_id: RemarkEntry(remark=remark)
        for invoice_id, remark in data.remarks.items()
    }
    return state.model_copy(
        update={
            "invoices": list(data.invoices),
            "remarks": remarks,
            "erp_config": data.erp_config,
            "load_status": LoadStatus.LOADED,
            "error": None,
            "loaded_at": data.loaded_at,
        }
    )


def load_failed(state: DashboardState, message: str) -> DashboardState:
    """Record a failed load; previously loaded data stays visible"""
    return state.model_copy(update={"load_status": LoadStatus.FAILED, "error": message})


def apply_filters(state: DashboardState, filters: InvoiceFilters) -> DashboardState:
    return state.model_copy(update={"filters": filters})


def clear_filters(state: DashboardState) -> DashboardState:
    """Reset filters and the sort order"""
    return state.model_copy(
        update={"filters": InvoiceFilters(), "sort": DEFAULT_SORT.model_copy()}
    )


def toggle_sort(state: DashboardState, key: SortKey) -> DashboardState:
    """Sort by key ascending, or flip to descending when already ascending on key"""
    direction = SortDirection.ASC
    if state.sort.key == key and state.sort.direction == SortDirection.ASC:
        direction = SortDirection.DESC
    return state.model_copy(update={"sort": SortSpec(key=key, direction=direction)})


def _with_entry(state: DashboardState, invoice_id: str, entry: RemarkEntry) -> DashboardState:
    remarks = dict(state.remarks)
    remarks[invoice_id] = entry
    return state.model_copy(update={"remarks": remarks})


def begin_remark_edit(
    state: DashboardState,
    invoice_id: str,
    updates: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> DashboardState:
    """
    Apply an edit optimistically

    The shown remark takes the updates at once. The value to roll back to is
    the last confirmed remark: the current one, unless an earlier edit of
    the same invoice is still pending.
    """
    now = now or utcnow()
    entry = state.remarks.get(invoice_id)
    current = entry.remark if entry else InvoiceRemark.default_for(invoice_id, now)

    if entry is not None and entry.sync_status == RemarkSyncStatus.PENDING:
        previous = entry.previous
    else:
        previous = entry.remark if entry else None

    optimistic = current.model_copy(update=dict(updates))
    return _with_entry(
        state,
        invoice_id,
        RemarkEntry(remark=optimistic, sync_status=RemarkSyncStatus.PENDING, previous=previous),
    )


def confirm_remark_edit(state: DashboardState, invoice_id: str, remark: InvoiceRemark) -> DashboardState:
    """Replace the optimistic value with the stored one"""
    return _with_entry(state, invoice_id, RemarkEntry(remark=remark))


def fail_remark_edit(
    state: DashboardState,
    invoice_id: str,
    message: str,
    now: Optional[datetime] = None,
) -> DashboardState:
    """
    Roll back to the pre-edit remark and keep the error

    A pending entry returns to its last confirmed remark. An entry that is
    no longer pending was already replaced by a confirm or a reload, so its
    remark stays. A default is synthesized only when there is no entry.
    """
    entry = state.remarks.get(invoice_id)
    if entry is None:
        previous = None
        restored = InvoiceRemark.default_for(invoice_id, now)
    elif entry.sync_status == RemarkSyncStatus.PENDING:
        previous = entry.previous
        restored = entry.previous or InvoiceRemark.default_for(invoice_id, now)
    else:
        previous = entry.previous
        restored = entry.remark
    return _with_entry(
        state,
        invoice_id,
        RemarkEntry(
            remark=restored,
            sync_status=RemarkSyncStatus.ERROR,
            previous=previous,
            error_message=message,
        ),
    )
