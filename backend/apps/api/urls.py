from django.urls import path
from apps.catalog.views import (
    ProductListView,
    ProductDetailView,
    ProductRelatedView,
    ProductReviewListView,
    CategoryListView,
    CategoryDetailView,
    CategoryProductListView,
)

urlpatterns = [
    path("products/", ProductListView.as_view(), name="api-products-list"),
    path(
        "products/<int:product_id>/",
        ProductDetailView.as_view(),
        name="api-products-detail",
    ),
    path(
        "products/<int:product_id>/related/",
        ProductRelatedView.as_view(),
        name="api-products-related",
    ),
    path(
        "products/<int:product_id>/reviews/",
        ProductReviewListView.as_view(),
        name="api-products-reviews",
    ),
    path("categories/", CategoryListView.as_view(), name="api-categories-list"),
    path(
        "categories/<int:category_id>/",
        CategoryDetailView.as_view(),
        name="api-categories-detail",
    ),
    path(
        "categories/<int:category_id>/products/",
        CategoryProductListView.as_view(),
        name="api-categories-products",
    ),
]
