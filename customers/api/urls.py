"""
客户API URL配置。
"""
from django.urls import path

from customers.api import views, admin_views

urlpatterns = [
    # 账户
    path('auth/register/', views.RegisterView.as_view(), name='auth-register'),
    path('auth/login/', views.LoginView.as_view(), name='auth-login'),
    path('auth/logout/', views.LogoutView.as_view(), name='auth-logout'),
    path('auth/me/', views.MeView.as_view(), name='auth-me'),
    path('account/', views.AccountView.as_view(), name='account-delete'),
    path('account/profile/', views.ProfileView.as_view(), name='account-profile'),
    path('account/company/', views.CompanyInfoView.as_view(), name='account-company'),

    # 地址簿
    path('account/addresses/', views.AddressListCreateView.as_view(), name='address-list-create'),
    path('account/addresses/<uuid:address_id>/', views.AddressDetailView.as_view(), name='address-detail'),
    path('account/addresses/<uuid:address_id>/set-preferred/',
         views.SetPreferredAddressView.as_view(), name='address-set-preferred'),

    # 地区
    path('locations/countries/', views.CountryListView.as_view(), name='location-countries'),
    path('locations/countries/<int:country_id>/states/', views.StateListView.as_view(), name='location-states'),
    path('locations/states/<int:state_id>/cities/', views.CityListView.as_view(), name='location-cities'),

    # 后台
    path('admin/customers/', admin_views.AdminCustomerListView.as_view(), name='admin-customer-list'),
    path('admin/customers/activate/',
         admin_views.AdminCustomerStatusView.as_view(active=True), name='admin-customer-activate'),
    path('admin/customers/deactivate/',
         admin_views.AdminCustomerStatusView.as_view(active=False), name='admin-customer-deactivate'),
    path('admin/customers/<uuid:customer_id>/',
         admin_views.AdminCustomerDetailView.as_view(), name='admin-customer-detail'),
    path('admin/users/', admin_views.AdminUserListView.as_view(), name='admin-user-list'),
    path('admin/users/activate/', admin_views.AdminUserStatusView.as_view(active=True), name='admin-user-activate'),
    path('admin/users/deactivate/',
         admin_views.AdminUserStatusView.as_view(active=False), name='admin-user-deactivate'),
]
