"""Warranty claim URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.claims import views

urlpatterns = [
    path(
        "customer/claims",
        views.CustomerClaimListView.as_view(),
        name="customer-claims",
    ),
    path(
        "customer/claims/<uuid:claim_id>",
        views.CustomerClaimDetailView.as_view(),
        name="customer-claim-detail",
    ),
    path("seller/claims", views.SellerClaimListView.as_view(), name="seller-claims"),
    path(
        "seller/claims/<uuid:claim_id>",
        views.SellerClaimDetailView.as_view(),
        name="seller-claim-detail",
    ),
    path(
        "admin/claims/<uuid:claim_id>",
        views.AdminClaimStatusView.as_view(),
        name="admin-claim-status",
    ),
]
