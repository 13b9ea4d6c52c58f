"""Dashboard API Routes

Load control, state summary and the headline dashboard views.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, status_code_for
from src.api.schemas.receivables_request import DashboardStateResponse
from src.app.controllers.dashboard_controller import DashboardController
from src.app.state.dashboard_state import RemarkSyncStatus
from src.app.use_cases.receivables.load_dashboard_data import LoadDashboardData
from src.depends import get_controller, get_dashboard_loader, get_loaded_controller
from src.domain.activity import ActivityItem
from src.domain.dashboard_metrics import DashboardMetrics, OverdueBucket

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _state_response(controller: DashboardController) -> DashboardStateResponse:
    state = controller.state
    return DashboardStateResponse(
        load_status=state.load_status.value,
        error=state.error,
        loaded_at=state.loaded_at,
        invoice_count=len(state.invoices),
        remark_count=len(state.remarks),
        updating_invoice_ids=sorted(state.updating_invoice_ids()),
        remark_errors={
            invoice_id: entry.error_message
            for invoice_id, entry in state.remarks.items()
            if entry.sync_status == RemarkSyncStatus.ERROR
        },
        erp_config=state.erp_config,
        filters=state.filters,
        sort=state.sort,
    )


@router.post(
    "/refresh",
    response_model=DashboardStateResponse,
    status_code=status.HTTP_200_OK,
    responses={
        502: {
            "description": "ERP unavailable or returned unexpected data",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ERP_HTTP_ERROR",
                            "message": "ERP request failed with status 503"
                        }
                    }
                }
            }
        }
    }
)
async def refresh(
    controller: DashboardController = Depends(get_controller),
    loader: LoadDashboardData = Depends(get_dashboard_loader),
):
    """
    Reload invoices and remarks.

    On failure the previously loaded data stays in place and the error is
    recorded in the state.
    """
    result = await controller.load(loader)
    if result.is_err():
        raise ClientError(result.error, status_code=status_code_for(result.error))
    return _state_response(controller)


@router.get("/state", response_model=DashboardStateResponse)
async def get_state(controller: DashboardController = Depends(get_controller)):
    """Current load status, pending edits, filters and sort"""
    return _state_response(controller)


@router.get("/metrics", response_model=DashboardMetrics)
async def get_metrics(controller: DashboardController = Depends(get_loaded_controller)):
    return controller.metrics()


@router.get("/overdue-buckets", response_model=List[OverdueBucket])
async def get_overdue_buckets(controller: DashboardController = Depends(get_loaded_controller)):
    return controller.overdue_buckets()


@router.get("/recent-activity", response_model=List[ActivityItem])
async def get_recent_activity(controller: DashboardController = Depends(get_loaded_controller)):
    return controller.recent_activity()
