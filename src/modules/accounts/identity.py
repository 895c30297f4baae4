"""Authenticated identity (tagged union).

One frozen dataclass per role.  Role-specific payload lives only on the
variant that needs it, so a ``SellerIdentity`` always carries its
``seller_id`` and a ``CustomerIdentity`` never has one.

The classes also satisfy the small surface DRF expects from
``request.user`` (``is_authenticated``, ``pk``) so they can be returned
directly from the authentication class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union
from uuid import UUID

from modules.accounts.models import Role


@dataclass(frozen=True)
class _BaseIdentity:
    user_id: UUID

    role: ClassVar[str]
    is_authenticated: ClassVar[bool] = True
    is_anonymous: ClassVar[bool] = False
    is_active: ClassVar[bool] = True

    @property
    def pk(self) -> UUID:
        return self.user_id

    def __str__(self) -> str:
        return f"{self.role}:{self.user_id}"


@dataclass(frozen=True)
class CustomerIdentity(_BaseIdentity):
    role: ClassVar[str] = Role.CUSTOMER


@dataclass(frozen=True)
class SellerIdentity(_BaseIdentity):
    seller_id: UUID
    role: ClassVar[str] = Role.SELLER


@dataclass(frozen=True)
class AdminIdentity(_BaseIdentity):
    role: ClassVar[str] = Role.ADMIN


Identity = Union[CustomerIdentity, SellerIdentity, AdminIdentity]
