"""
评价API URL配置。
"""
from django.urls import path

from reviews.api import views

urlpatterns = [
    path('products/<uuid:product_id>/reviews/', views.ProductReviewListView.as_view(), name='product-reviews'),
    path('reviews/', views.ReviewCreateView.as_view(), name='review-create'),
    path('reviews/<int:review_id>/useful/', views.ReviewUsefulView.as_view(), name='review-useful'),
    path('account/reviews/', views.MyReviewListView.as_view(), name='my-review-list'),
]
