"""Registered product repositories package."""

from modules.products.repositories.django_repository import (
    RegisteredProductDjangoRepository,
)
from modules.products.repositories.interfaces import IRegisteredProductRepository

__all__ = ["IRegisteredProductRepository", "RegisteredProductDjangoRepository"]
