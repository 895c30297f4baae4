"""Role-based authorization policy.

``authorize`` is the pure predicate; ``role_required`` wraps it in a DRF
permission class so views declare the roles they accept.
"""

from __future__ import annotations

from typing import Any, Iterable

from rest_framework.permissions import BasePermission

from modules.core.exceptions import Forbidden


def authorize(identity: Any, required_roles: Iterable[str], action: str) -> None:
    """Allow iff ``identity.role`` is one of *required_roles*.

    Raises:
        Forbidden: carrying *action* and *required_roles* for the logs.
    """
    roles = tuple(required_roles)
    if getattr(identity, "role", None) not in roles:
        raise Forbidden(action=action, required_roles=roles)


def role_required(*roles: str) -> type[BasePermission]:
    class HasRole(BasePermission):
        def has_permission(self, request, view) -> bool:
            action = f"{request.method} {request.path}"
            authorize(request.user, roles, action)
            return True

    HasRole.__name__ = f"HasRole[{','.join(roles)}]"
    return HasRole
