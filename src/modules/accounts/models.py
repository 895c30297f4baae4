"""User and Role models.

Business rules implemented:
- Email is unique across all users (login identifier).
- Role is immutable reference data: CUSTOMER, SELLER or ADMIN.
- Users are never hard-deleted; ``is_active`` gates authentication.
- Passwords are stored only as salted one-way hashes (Django hashers).
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models

from modules.core.models import BaseModel


class Role(models.TextChoices):
    CUSTOMER = "CUSTOMER", "Customer"
    SELLER = "SELLER", "Seller"
    ADMIN = "ADMIN", "Admin"


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> User:
        if not email:
            raise ValueError("Users must have an email address.")
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> User:
        extra_fields["role"] = Role.ADMIN
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, BaseModel):
    """Platform account.

    A SELLER user owns exactly one ``sellers.Seller`` profile, created in
    the same transaction as the user (see ``SellerService.provision_seller``).
    """

    email = models.EmailField(max_length=254, unique=True)
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20)
    address = models.TextField(blank=True, default="")
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )
    is_active = models.BooleanField(default=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name", "phone_number"]

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role"], name="users_role_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"
