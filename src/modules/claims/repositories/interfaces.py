"""Warranty claim repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.claims.models import WarrantyClaim


class IClaimRepository(IRepository["WarrantyClaim"]):
    """Repository contract for the WarrantyClaim aggregate."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[WarrantyClaim]:
        """Retrieve and row-lock a claim; call inside ``transaction.atomic``."""

    @abstractmethod
    def find_active_for_product(
        self, product_id: str, exclude_id: Optional[str] = None
    ) -> Optional[WarrantyClaim]:
        """Return the product's non-terminal claim, if any."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> WarrantyClaim:
        """Insert a claim row."""

    @abstractmethod
    def for_customer(self, customer_id: str) -> QuerySet:
        """Claims filed by a customer, newest first."""

    @abstractmethod
    def for_seller(self, seller_id: str) -> QuerySet:
        """Claims on a shop's products, newest first."""
