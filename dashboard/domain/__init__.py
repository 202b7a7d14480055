"""
仪表盘领域层包。
"""
from dashboard.domain.services import percent_change, comparison_kpi
from dashboard.domain.repositories import DashboardRepository

__all__ = ['percent_change', 'comparison_kpi', 'DashboardRepository']
