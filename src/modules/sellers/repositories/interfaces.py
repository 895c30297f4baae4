"""Seller repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.sellers.models import Seller


class ISellerRepository(IRepository["Seller"]):
    """Repository contract for the Seller aggregate."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Seller:
        """Insert a seller profile for an existing ``user``."""

    @abstractmethod
    def update_fields(self, id: str, changes: Dict[str, Any]) -> Optional[Seller]:
        """Write only *changes*; return ``None`` if the seller is missing."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Seller]:
        """List sellers ordered by shop name."""

    @abstractmethod
    def list_for_customer(self, customer_id: str) -> List[Seller]:
        """Sellers the customer has registered at least one product with."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Seller]:
        """Retrieve and row-lock a seller; call inside ``transaction.atomic``."""
