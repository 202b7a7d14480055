"""
商品目录模块URL配置。
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('catalog.api.urls')),
]
