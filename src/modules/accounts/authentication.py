"""Bearer-token authentication for Django REST Framework.

``AuthenticationGateway`` turns a raw token into an ``Identity``; it has
no HTTP knowledge and receives its token verifier and user repository
through the constructor.  ``BearerTokenAuthentication`` is the thin DRF
adapter registered in ``DEFAULT_AUTHENTICATION_CLASSES``.

Security decisions
------------------
* **Fail Closed**: any decode or lookup failure rejects the request.
* Role and activation are re-read from the store on every request; the
  ``role`` claim inside the token is informational only.
"""

from __future__ import annotations

from typing import Optional

import structlog
from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request

from modules.accounts.identity import (
    AdminIdentity,
    CustomerIdentity,
    Identity,
    SellerIdentity,
)
from modules.accounts.models import Role
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.repositories.interfaces import IUserRepository
from modules.accounts.tokens import TokenService
from modules.core.exceptions import Forbidden, InvalidToken, UserInactive, UserNotFound

logger = structlog.get_logger(__name__)


class AuthenticationGateway:
    def __init__(self, tokens: TokenService, users: IUserRepository) -> None:
        self._tokens = tokens
        self._users = users

    def authenticate(self, token: str) -> Identity:
        """Resolve *token* to the identity of an active user.

        Raises:
            InvalidToken / ExpiredToken: token rejected by the verifier.
            UserNotFound: the subject no longer exists.
            UserInactive: the subject has been deactivated.
            Forbidden: a SELLER account without a seller profile.
        """
        claims = self._tokens.verify(token)
        user = self._users.get_with_seller(str(claims.user_id))
        if user is None:
            raise UserNotFound()
        if not user.is_active:
            raise UserInactive()

        if user.role == Role.ADMIN:
            identity: Identity = AdminIdentity(user_id=user.id)
        elif user.role == Role.SELLER:
            seller = getattr(user, "seller_profile", None)
            if seller is None:
                logger.warning("auth.seller_profile_missing", user_id=str(user.id))
                raise Forbidden("No seller profile associated with this user account.")
            identity = SellerIdentity(user_id=user.id, seller_id=seller.id)
        else:
            identity = CustomerIdentity(user_id=user.id)

        logger.debug("auth.authenticated", user_id=str(user.id), role=identity.role)
        return identity


class BearerTokenAuthentication(BaseAuthentication):
    """DRF authentication class for ``Authorization: Bearer <token>``."""

    keyword = "Bearer"

    def __init__(self, gateway: Optional[AuthenticationGateway] = None) -> None:
        self._gateway = gateway or AuthenticationGateway(
            tokens=TokenService(),
            users=UserDjangoRepository(),
        )

    def authenticate(self, request: Request):
        """Return ``(Identity, token)`` or ``None`` when no header is sent."""
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return None

        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != self.keyword.lower():
            raise InvalidToken()

        token = parts[1]
        return (self._gateway.authenticate(token), token)

    def authenticate_header(self, request: Request) -> str:
        return f'{self.keyword} realm="api"'
