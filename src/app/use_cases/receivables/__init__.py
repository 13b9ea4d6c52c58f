"""Receivables use cases"""
from .fetch_remarks import FetchRemarks
from .update_remark import UpdateRemark
from .get_erp_config import GetErpConfig
from .load_dashboard_data import LoadDashboardData
from .dtos import (
    UpdateRemarkCommandDTO,
    ErpConfigDTO,
    DashboardDataDTO,
)

__all__ = [
    "FetchRemarks",
    "UpdateRemark",
    "GetErpConfig",
    "LoadDashboardData",
    "UpdateRemarkCommandDTO",
    "ErpConfigDTO",
    "DashboardDataDTO",
]
