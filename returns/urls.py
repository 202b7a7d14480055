"""
退货模块URL配置。
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('returns.api.urls')),
]
