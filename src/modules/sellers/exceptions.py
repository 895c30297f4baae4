"""Seller domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import Conflict, NotFound


class SellerNotFound(NotFound):
    default_message = "Seller not found."


class SellerNotConfigured(NotFound):
    default_message = (
        "Selected seller is not active or not configured for product validation."
    )


class AlreadyDeactivated(Conflict):
    default_message = "Seller account is already deactivated."
