from .dashboard_state import (
    DashboardState,
    LoadStatus,
    RemarkEntry,
    RemarkSyncStatus,
)

__all__ = [
    "DashboardState",
    "LoadStatus",
    "RemarkEntry",
    "RemarkSyncStatus",
]
