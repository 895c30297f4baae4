"""Registered product repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import RegisteredProduct


class IRegisteredProductRepository(IRepository["RegisteredProduct"]):
    """Repository contract for the RegisteredProduct aggregate."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[RegisteredProduct]:
        """Retrieve and row-lock a product; call inside ``transaction.atomic``."""

    @abstractmethod
    def find_registration(
        self, customer_id: str, seller_id: str, order_id: str
    ) -> Optional[RegisteredProduct]:
        """Look up by the (customer, seller, order id) uniqueness key."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> RegisteredProduct:
        """Insert a product row."""

    @abstractmethod
    def list_for_customer(self, customer_id: str) -> List[RegisteredProduct]:
        """Customer's products with their seller, newest purchase first."""

    @abstractmethod
    def list_for_seller(self, seller_id: str) -> List[RegisteredProduct]:
        """Products registered with a shop, with their customer."""
