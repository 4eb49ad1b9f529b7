from django.urls import path

from .views import DeliveryListView, OrderDetailView, OrderListView, OrderStatusView

urlpatterns = [
    path("", OrderListView.as_view(), name="api-orders-list"),
    path("deliveries/", DeliveryListView.as_view(), name="api-orders-deliveries"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="api-orders-detail"),
    path("<int:order_id>/status/", OrderStatusView.as_view(), name="api-orders-status"),
]
