"""Django ORM implementation of the User repository.

Follows the Null Object pattern: look-ups return ``None`` instead of
raising, the Service Layer decides what a missing user means.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import connection

from modules.accounts.models import Role, User
from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)

ADMIN_SETUP_LOCK_KEY = 7_201_001


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        try:
            return User.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.filter(
            email=User.objects.normalize_email(email)
        ).first()

    def get_with_seller(self, id: str) -> Optional[User]:
        """Single query: ``users LEFT JOIN sellers``."""
        try:
            return User.objects.select_related("seller_profile").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def create(self, data: Dict[str, Any]) -> User:
        fields = dict(data)
        password = fields.pop("password")
        email = fields.pop("email")
        user = User.objects.create_user(email=email, password=password, **fields)
        logger.info("user.created", user_id=str(user.id), role=user.role)
        return user

    def save(self, entity: User) -> User:
        entity.save()
        logger.info("user.saved", user_id=str(entity.id))
        return entity

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        queryset = User.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("-created_at"))

    def admin_exists(self) -> bool:
        return User.objects.filter(role=Role.ADMIN).exists()

    def lock_admin_setup(self) -> None:
        if connection.vendor == "postgresql":
            with connection.cursor() as cursor:
                cursor.execute(
                    "SELECT pg_advisory_xact_lock(%s)", [ADMIN_SETUP_LOCK_KEY]
                )
            return
        # Any write statement takes SQLite's database-wide write lock.
        User.objects.filter(role=Role.ADMIN).update(role=Role.ADMIN)
