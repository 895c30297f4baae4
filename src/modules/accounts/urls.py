"""Account URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.accounts import views

urlpatterns = [
    path(
        "auth/register/customer",
        views.RegisterCustomerView.as_view(),
        name="register-customer",
    ),
    path("auth/login", views.LoginView.as_view(), name="login"),
    path("auth/logout", views.LogoutView.as_view(), name="logout"),
    path(
        "setup/register-admin",
        views.AdminSetupView.as_view(),
        name="register-admin",
    ),
    path(
        "customer/profile",
        views.CustomerProfileView.as_view(),
        name="customer-profile",
    ),
    path("admin/users", views.UserListView.as_view(), name="admin-users"),
    path(
        "admin/users/<uuid:user_id>/status",
        views.UserStatusView.as_view(),
        name="admin-user-status",
    ),
]
