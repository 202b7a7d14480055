"""
购物车模块URL配置。
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('cart.api.urls')),
]
