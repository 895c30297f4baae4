"""Django ORM implementation of the WarrantyClaim repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from modules.claims.constants import TERMINAL_STATES
from modules.claims.models import WarrantyClaim
from modules.claims.repositories.interfaces import IClaimRepository

logger = structlog.get_logger(__name__)

_DETAIL_RELATIONS = (
    "registered_product",
    "registered_product__seller",
    "customer",
)


class ClaimDjangoRepository(IClaimRepository):
    """Concrete WarrantyClaim repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[WarrantyClaim]:
        try:
            return (
                WarrantyClaim.objects.select_related(*_DETAIL_RELATIONS)
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[WarrantyClaim]:
        try:
            return WarrantyClaim.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def find_active_for_product(
        self, product_id: str, exclude_id: Optional[str] = None
    ) -> Optional[WarrantyClaim]:
        queryset = WarrantyClaim.objects.filter(
            registered_product_id=product_id
        ).exclude(status__in=TERMINAL_STATES)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.first()

    def create(self, data: Dict[str, Any]) -> WarrantyClaim:
        claim = WarrantyClaim.objects.create(**data)
        logger.info("claim.inserted", claim_id=str(claim.id))
        return claim

    def save(self, entity: WarrantyClaim) -> WarrantyClaim:
        entity.save()
        return entity

    def for_customer(self, customer_id: str) -> QuerySet:
        return (
            WarrantyClaim.objects.select_related(*_DETAIL_RELATIONS)
            .filter(customer_id=customer_id)
            .order_by("-created_at")
        )

    def for_seller(self, seller_id: str) -> QuerySet:
        return (
            WarrantyClaim.objects.select_related(*_DETAIL_RELATIONS)
            .filter(registered_product__seller_id=seller_id)
            .order_by("-created_at")
        )
