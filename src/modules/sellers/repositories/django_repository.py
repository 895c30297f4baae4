"""Django ORM implementation of the Seller repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.sellers.models import Seller
from modules.sellers.repositories.interfaces import ISellerRepository

logger = structlog.get_logger(__name__)


class SellerDjangoRepository(ISellerRepository):
    """Concrete Seller repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Seller]:
        try:
            return Seller.objects.select_related("user").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def create(self, data: Dict[str, Any]) -> Seller:
        seller = Seller.objects.create(**data)
        logger.info(
            "seller.created",
            seller_id=str(seller.id),
            contract_status=seller.contract_status,
        )
        return seller

    def save(self, entity: Seller) -> Seller:
        entity.save()
        return entity

    def update_fields(self, id: str, changes: Dict[str, Any]) -> Optional[Seller]:
        seller = self.get_by_id(id)
        if seller is None:
            return None
        for field, value in changes.items():
            setattr(seller, field, value)
        seller.save(update_fields=list(changes))
        logger.info("seller.updated", seller_id=str(seller.id), fields=sorted(changes))
        return seller

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Seller]:
        queryset = Seller.objects.select_related("user")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("shop_name"))

    def list_for_customer(self, customer_id: str) -> List[Seller]:
        return list(
            Seller.objects.filter(registered_products__customer_id=customer_id)
            .distinct()
            .order_by("shop_name")
        )

    def get_for_update(self, id: str) -> Optional[Seller]:
        try:
            return Seller.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
