from django.urls import path

from .views import MeView, RegisterView

urlpatterns = [
    path("register/", RegisterView.as_view(), name="api-users-register"),
    path("me/", MeView.as_view(), name="api-users-me"),
]
