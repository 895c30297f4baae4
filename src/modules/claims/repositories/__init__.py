"""Warranty claim repositories package."""

from modules.claims.repositories.django_repository import ClaimDjangoRepository
from modules.claims.repositories.interfaces import IClaimRepository

__all__ = ["ClaimDjangoRepository", "IClaimRepository"]
