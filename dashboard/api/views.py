"""
后台仪表盘API视图。
"""
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsAdminOrManager
from dashboard.api.dependencies import get_dashboard_service


class DashboardView(ApiBaseView):
    """仪表盘统计数据"""
    permission_classes = [IsAdminOrManager]

    def get(self, request):
        return self.success_response(data=get_dashboard_service().get_dashboard())
