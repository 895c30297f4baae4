"""Django ORM implementation of the RegisteredProduct repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.products.models import RegisteredProduct
from modules.products.repositories.interfaces import IRegisteredProductRepository

logger = structlog.get_logger(__name__)


class RegisteredProductDjangoRepository(IRegisteredProductRepository):
    """Concrete RegisteredProduct repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[RegisteredProduct]:
        try:
            return (
                RegisteredProduct.objects.select_related("seller")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[RegisteredProduct]:
        try:
            return RegisteredProduct.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def find_registration(
        self, customer_id: str, seller_id: str, order_id: str
    ) -> Optional[RegisteredProduct]:
        return RegisteredProduct.objects.filter(
            customer_id=customer_id,
            seller_id=seller_id,
            seller_order_id=order_id,
        ).first()

    def create(self, data: Dict[str, Any]) -> RegisteredProduct:
        product = RegisteredProduct.objects.create(**data)
        logger.info("registered_product.created", product_id=str(product.id))
        return product

    def save(self, entity: RegisteredProduct) -> RegisteredProduct:
        entity.save()
        return entity

    def list_for_customer(self, customer_id: str) -> List[RegisteredProduct]:
        return list(
            RegisteredProduct.objects.select_related("seller")
            .filter(customer_id=customer_id)
            .order_by("-purchase_date", "-created_at")
        )

    def list_for_seller(self, seller_id: str) -> List[RegisteredProduct]:
        return list(
            RegisteredProduct.objects.select_related("customer")
            .filter(seller_id=seller_id)
            .order_by("-purchase_date", "-created_at")
        )
