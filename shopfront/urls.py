"""
URL configuration for shopfront project.

各业务模块通过自身的urls.py挂载到 /api/ 下。
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    # 客户与账户模块API
    path('', include('customers.urls')),
    # 商品目录模块API
    path('', include('catalog.urls')),
    # 购物车模块API
    path('', include('cart.urls')),
    # 结算模块API
    path('', include('checkout.urls')),
    # 订单模块API
    path('', include('orders.urls')),
    # 退货模块API
    path('', include('returns.urls')),
    # 商品评价模块API
    path('', include('reviews.urls')),
    # 后台仪表盘API
    path('', include('dashboard.urls')),
]

# 在开发环境中提供静态文件服务
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
