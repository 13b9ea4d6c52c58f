"""Customer API Routes"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from src.app.controllers.dashboard_controller import DashboardController
from src.depends import get_loaded_controller
from src.domain.customer_summary import CustomerSummary
from src.domain.invoice import Invoice

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=List[CustomerSummary])
async def list_customers(
    search: Optional[str] = Query(default=None, description="Substring of customer name or code"),
    controller: DashboardController = Depends(get_loaded_controller),
):
    return controller.customers(search)


@router.get("/{customer_name}/invoices", response_model=List[Invoice])
async def list_customer_invoices(
    customer_name: str,
    controller: DashboardController = Depends(get_loaded_controller),
):
    """Invoice lines of one customer, newest first"""
    return controller.customer_invoices(customer_name)
