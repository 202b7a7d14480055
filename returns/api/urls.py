"""
退货API URL配置。
"""
from django.urls import path

from returns.api import views, admin_views

urlpatterns = [
    # 前台
    path('returns/search-order/', views.ReturnSearchOrderView.as_view(), name='return-search-order'),
    path('returns/', views.ReturnCreateView.as_view(), name='return-create'),
    path('account/returns/', views.MyReturnListView.as_view(), name='my-return-list'),

    # 后台
    path('admin/returns/', admin_views.AdminReturnListView.as_view(), name='admin-return-list'),
    path('admin/returns/<int:return_id>/', admin_views.AdminReturnDetailView.as_view(), name='admin-return-detail'),
    path('admin/returns/<int:return_id>/status/',
         admin_views.AdminReturnStatusView.as_view(), name='admin-return-status'),
    path('admin/returns/<int:return_id>/refund-amount/',
         admin_views.AdminReturnRefundAmountView.as_view(), name='admin-return-refund-amount'),
    path('admin/returns/<int:return_id>/restock-item/',
         admin_views.AdminReturnRestockItemView.as_view(), name='admin-return-restock-item'),
]
