"""
仪表盘模块的应用服务装配。
"""
from catalog.api.dependencies import get_catalog_factory
from catalog.domain.config import LOW_STOCK_THRESHOLD
from dashboard.application import DashboardService
from dashboard.infrastructure.repositories.django_dashboard_repository import DjangoDashboardRepository


def get_dashboard_service() -> DashboardService:
    return DashboardService(
        dashboard_repository=DjangoDashboardRepository(),
        product_repository=get_catalog_factory().products,
        low_stock_threshold=LOW_STOCK_THRESHOLD
    )
