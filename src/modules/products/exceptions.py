"""Registered product domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import Conflict, FailedDependency, InvalidInput, NotFound


class ProductNotFound(NotFound):
    default_message = "Registered product not found."


class FuturePurchaseDate(InvalidInput):
    default_message = "Purchase date cannot be in the future."


class DuplicateRegistration(Conflict):
    default_message = (
        "This product has already been registered by you for this seller "
        "and order."
    )


class SellerValidationFailed(FailedDependency):
    default_message = (
        "Purchase details could not be validated with the seller. Please "
        "verify your order ID and purchase date."
    )


class SellerUnreachable(FailedDependency):
    default_message = (
        "Could not connect to the seller's system for validation. Please "
        "try again later."
    )


class IncompleteSellerResponse(FailedDependency):
    default_message = (
        "Seller API response missing crucial product data (productName, "
        "authoritativePurchaseDate, warrantyPeriodMonths, "
        "customerPhoneNumber). Please contact admin."
    )
