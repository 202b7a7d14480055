"""
结算API URL配置。
"""
from django.urls import path

from checkout.api import views

urlpatterns = [
    path('checkout/order-details/', views.OrderDetailsView.as_view(), name='checkout-order-details'),
    path('checkout/shipping-country/', views.ShippingCountryView.as_view(), name='checkout-shipping-country'),
    path('checkout/billing-country/', views.BillingCountryView.as_view(), name='checkout-billing-country'),
    path('checkout/pickup/', views.PickupDataView.as_view(), name='checkout-pickup'),
    path('checkout/guest-contact/', views.GuestContactView.as_view(), name='checkout-guest-contact'),
    path('checkout/guest-address/', views.GuestAddressView.as_view(), name='checkout-guest-address'),
    path('checkout/submit/', views.SubmitOrderView.as_view(), name='checkout-submit'),
    path('checkout/order-placed/', views.OrderPlacedView.as_view(), name='checkout-order-placed'),
]
