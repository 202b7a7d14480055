"""
订单API URL配置。
"""
from django.urls import path

from orders.api import views, admin_views

urlpatterns = [
    # 客户
    path('account/orders/', views.MyOrderListView.as_view(), name='my-order-list'),
    path('account/orders/<str:order_number>/', views.MyOrderDetailView.as_view(), name='my-order-detail'),

    # 后台
    path('admin/orders/', admin_views.AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/<str:order_number>/', admin_views.AdminOrderDetailView.as_view(), name='admin-order-detail'),
    path('admin/orders/<str:order_number>/mark-paid/',
         admin_views.AdminOrderMarkPaidView.as_view(), name='admin-order-mark-paid'),
    path('admin/orders/<str:order_number>/mark-unpaid/',
         admin_views.AdminOrderMarkUnpaidView.as_view(), name='admin-order-mark-unpaid'),
    path('admin/orders/<str:order_number>/update/',
         admin_views.AdminOrderUpdateView.as_view(), name='admin-order-update'),
    path('admin/orders/<str:order_number>/batch-update/',
         admin_views.AdminOrderBatchUpdateView.as_view(), name='admin-order-batch-update'),
]
