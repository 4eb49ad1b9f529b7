from django.urls import path

from .views import (
    CategoryDetailView,
    CategoryListView,
    PendingProductListView,
    ProductDetailView,
    ProductListView,
    ProductReviewView,
    ProductSearchView,
    ProductSubmitView,
    SuggestionsView,
)

urlpatterns = [
    path("products/", ProductListView.as_view(), name="api-products-list"),
    path("products/search/", ProductSearchView.as_view(), name="api-products-search"),
    path("products/suggestions/", SuggestionsView.as_view(), name="api-products-suggestions"),
    path("products/submit/", ProductSubmitView.as_view(), name="api-products-submit"),
    path("products/pending/", PendingProductListView.as_view(), name="api-products-pending"),
    path("products/<int:product_id>/", ProductDetailView.as_view(), name="api-products-detail"),
    path(
        "products/<int:product_id>/review/",
        ProductReviewView.as_view(),
        name="api-products-review",
    ),
    path("categories/", CategoryListView.as_view(), name="api-categories-list"),
    path("categories/<slug:slug>/", CategoryDetailView.as_view(), name="api-categories-detail"),
]
