from .dashboard_controller import DashboardController

__all__ = ["DashboardController"]
