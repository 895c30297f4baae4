"""Seller URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.sellers import views

urlpatterns = [
    path(
        "auth/register/seller",
        views.RegisterSellerView.as_view(),
        name="register-seller",
    ),
    path("seller/profile", views.SellerProfileView.as_view(), name="seller-profile"),
    path(
        "seller/deactivate-request",
        views.SellerDeactivationView.as_view(),
        name="seller-deactivate-request",
    ),
    path(
        "customer/sellers",
        views.ActiveSellerListView.as_view(),
        name="customer-sellers",
    ),
    path(
        "customer/my-sellers",
        views.CustomerSellerListView.as_view(),
        name="customer-my-sellers",
    ),
    path("admin/sellers", views.AdminSellerListView.as_view(), name="admin-sellers"),
    path(
        "admin/sellers/<uuid:seller_id>",
        views.AdminSellerDetailView.as_view(),
        name="admin-seller-detail",
    ),
    path(
        "admin/sellers/<uuid:seller_id>/status",
        views.AdminSellerStatusView.as_view(),
        name="admin-seller-status",
    ),
]
