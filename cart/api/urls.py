"""
购物车API URL配置。
"""
from django.urls import path

from cart.api import views

urlpatterns = [
    path('cart/', views.CartView.as_view(), name='cart'),
    path('cart/summary/', views.CartSummaryView.as_view(), name='cart-summary'),
    path('cart/add/', views.CartAddView.as_view(), name='cart-add'),
    path('cart/update/', views.CartUpdateView.as_view(), name='cart-update'),
    path('cart/remove/', views.CartRemoveView.as_view(), name='cart-remove'),
]
