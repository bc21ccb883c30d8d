"""User and admin routes."""

from django.urls import path

from .views import AdminBootstrapView, LoginView, UserCheckView


urlpatterns = [
    path("users/check", UserCheckView.as_view(), name="users-check"),
    path("admin/create", AdminBootstrapView.as_view(), name="admin-create"),
    path("login", LoginView.as_view(), name="login"),
]
