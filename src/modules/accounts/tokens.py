"""Bearer token issuer / verifier.

HS256 JWTs signed with ``JWT_SIGNING_KEY``.  The algorithm list passed to
``jwt.decode`` is fixed by configuration, never read from the token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt as pyjwt
import structlog
from django.conf import settings
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from modules.core.exceptions import ExpiredToken, InvalidToken

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    user_id: UUID
    role: str
    expires_at: datetime


class TokenService:
    def __init__(
        self,
        signing_key: str | None = None,
        lifetime: timedelta | None = None,
        algorithm: str | None = None,
    ) -> None:
        self._key = signing_key or settings.JWT_SIGNING_KEY
        self._lifetime = lifetime or settings.JWT_ACCESS_TOKEN_LIFETIME
        self._algorithm = algorithm or settings.JWT_ALGORITHM

    def issue(self, user_id: UUID, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return pyjwt.encode(payload, self._key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode *token*.

        Raises:
            ExpiredToken: signature valid but ``exp`` is in the past.
            InvalidToken: malformed, bad signature or missing claims.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except ExpiredSignatureError as exc:
            logger.info("token.expired")
            raise ExpiredToken() from exc
        except PyJWTError as exc:
            logger.warning("token.invalid", error=str(exc))
            raise InvalidToken() from exc

        try:
            user_id = UUID(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidToken() from exc

        return TokenClaims(
            user_id=user_id,
            role=payload.get("role", ""),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
