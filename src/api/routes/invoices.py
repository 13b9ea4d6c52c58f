"""Invoice API Routes

Invoice table, filters, sorting and remark edits.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, status_code_for
from src.api.schemas.receivables_request import (
    FiltersSchema,
    PaymentStatusOption,
    RemarkUpdateSchema,
)
from src.app.controllers.dashboard_controller import DashboardController
from src.app.use_cases.receivables.update_remark import UpdateRemark
from src.depends import get_controller, get_loaded_controller, get_remark_updater
from src.domain.invoice_remark import InvoiceRemark, PaymentStatus
from src.domain.invoice_view import InvoiceFilters, InvoiceTable, SortKey, SortSpec

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get("", response_model=InvoiceTable)
async def get_invoice_table(controller: DashboardController = Depends(get_loaded_controller)):
    """
    Invoice table for the current filters and sort.

    Rows are grouped into contiguous customer runs, each with total and
    open-amount subtotals.
    """
    return controller.invoice_table()


@router.get("/payment-statuses", response_model=List[PaymentStatusOption])
async def list_payment_statuses():
    return [PaymentStatusOption.for_status(option) for option in PaymentStatus]


@router.put("/filters", response_model=InvoiceFilters)
async def set_filters(
    request: FiltersSchema,
    controller: DashboardController = Depends(get_controller),
):
    return controller.set_filters(request.to_filters()).filters


@router.delete("/filters", response_model=InvoiceFilters)
async def clear_filters(controller: DashboardController = Depends(get_controller)):
    """Reset filters and sort to their defaults"""
    return controller.clear_filters().filters


@router.post("/sort/{sort_key}", response_model=SortSpec)
async def sort_by(
    sort_key: SortKey,
    controller: DashboardController = Depends(get_controller),
):
    """Sort by a column; repeating the same column flips to descending"""
    return controller.sort_by(sort_key).sort


@router.patch(
    "/{invoice_id}/remark",
    response_model=InvoiceRemark,
    status_code=status.HTTP_200_OK,
    responses={
        500: {
            "description": "The remark could not be saved; the edit was rolled back",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "REMARK_UPDATE_FAILED",
                            "message": "Failed to save the remark. Please try again."
                        }
                    }
                }
            }
        }
    }
)
async def update_remark(
    invoice_id: str,
    request: RemarkUpdateSchema,
    controller: DashboardController = Depends(get_controller),
    updater: UpdateRemark = Depends(get_remark_updater),
):
    """
    Update an invoice's remark.

    **Request body** (all optional):
    - `status`: unpaid, in_collection, partially_paid, paid, cancelled
    - `text`: free-text note
    - `status_date`: defaults to now when the status changes
    - `follow_up_date`: null clears it

    **Returns:**
    - 200: The stored remark
    - 400: Invalid request
    - 500: Store failure; the shown remark was rolled back
    """
    result = await controller.update_remark(request.to_command(invoice_id), updater)
    if result.is_err():
        raise ClientError(result.error, status_code=status_code_for(result.error))
    return result.value
