"""Warranty claim domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import Conflict, Forbidden, InvalidInput, NotFound


class ClaimNotFound(NotFound):
    default_message = "Warranty claim not found."


class InvalidClaimStatus(InvalidInput):
    pass


class DenialNotesRequired(InvalidInput):
    default_message = "Response notes are required when denying a claim."


class ActiveClaimExists(Conflict):
    default_message = "An active claim already exists for this product."


class NotProductOwner(Forbidden):
    default_message = "This product does not belong to your account."


class NotClaimOwner(Forbidden):
    default_message = "This claim does not belong to your account."


class NotSellerClaim(Forbidden):
    default_message = "This claim does not belong to your shop's products."
