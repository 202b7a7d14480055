"""
仪表盘API URL配置。
"""
from django.urls import path

from dashboard.api import views

urlpatterns = [
    path('admin/dashboard/', views.DashboardView.as_view(), name='admin-dashboard'),
]
