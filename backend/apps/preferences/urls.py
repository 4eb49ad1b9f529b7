from django.urls import path

from .views import ScreenView, SearchHistoryView, WishlistItemView, WishlistView

urlpatterns = [
    path("wishlist/", WishlistView.as_view(), name="api-wishlist"),
    path("wishlist/<str:product_id>/", WishlistItemView.as_view(), name="api-wishlist-item"),
    path("search-history/", SearchHistoryView.as_view(), name="api-search-history"),
    path("screen/", ScreenView.as_view(), name="api-screen"),
]
