from django.urls import path

from .views import CartItemListView, CartItemView, CartView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemListView.as_view(), name="api-cart-items"),
    path("items/<str:product_id>/", CartItemView.as_view(), name="api-cart-item"),
]
