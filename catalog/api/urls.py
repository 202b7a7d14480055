"""
商品目录API URL配置。
"""
from django.urls import path

from catalog.api import views, admin_views

urlpatterns = [
    # 前台
    path('products/', views.ProductListView.as_view(), name='product-list'),
    path('products/autocomplete/', views.ProductAutocompleteView.as_view(), name='product-autocomplete'),
    path('products/<uuid:product_id>/', views.ProductDetailView.as_view(), name='product-detail'),
    path('products/<uuid:product_id>/price/', views.ProductPriceView.as_view(), name='product-price'),
    path('categories/', views.CategoryTreeView.as_view(), name='category-tree'),
    path('categories/<slug:slug>/', views.CategoryDetailView.as_view(), name='category-detail'),
    path('currency/', views.CurrencyView.as_view(), name='currency'),
    path('account/wishlist/', views.WishlistView.as_view(), name='wishlist'),
    path('account/wishlist/<uuid:product_id>/', views.WishlistItemView.as_view(), name='wishlist-item'),
    path('account/wishlist/<uuid:product_id>/check/', views.WishlistCheckView.as_view(), name='wishlist-check'),

    # 后台
    path('admin/products/', admin_views.AdminProductListView.as_view(), name='admin-product-list'),
    path('admin/products/<uuid:product_id>/', admin_views.AdminProductDetailView.as_view(), name='admin-product-detail'),
    path('admin/brands/', admin_views.AdminBrandListView.as_view(), name='admin-brand-list'),
    path('admin/categories/', admin_views.AdminCategoryListCreateView.as_view(), name='admin-category-list'),
    path('admin/categories/<uuid:category_id>/',
         admin_views.AdminCategoryDetailView.as_view(), name='admin-category-detail'),
]
