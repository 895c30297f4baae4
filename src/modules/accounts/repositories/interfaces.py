"""User repository interface.

Extends ``IRepository[User]`` with the look-ups needed by login
(email), the authentication gateway (user joined with its seller
profile) and the one-time admin setup.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by (normalised) email address."""

    @abstractmethod
    def get_with_seller(self, id: str) -> Optional[User]:
        """Retrieve a user with its seller profile eagerly loaded."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> User:
        """Insert a user; ``data["password"]`` is plain text and gets hashed."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        """List users, newest first."""

    @abstractmethod
    def admin_exists(self) -> bool:
        """Return ``True`` once any ADMIN account has been created."""

    @abstractmethod
    def lock_admin_setup(self) -> None:
        """Block other first-admin setups until the current transaction ends."""
