"""Registered product URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.products import views

urlpatterns = [
    path(
        "customer/products/register",
        views.ProductRegistrationView.as_view(),
        name="customer-product-register",
    ),
    path(
        "customer/products",
        views.CustomerProductListView.as_view(),
        name="customer-products",
    ),
    path(
        "seller/products",
        views.SellerProductListView.as_view(),
        name="seller-products",
    ),
]
