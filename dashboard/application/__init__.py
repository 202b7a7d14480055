from dashboard.application.dashboard_service import DashboardService

__all__ = ['DashboardService']
