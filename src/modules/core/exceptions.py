"""Domain error taxonomy.

Every service raises one of these (or a module-specific subclass declared
in that module's ``exceptions.py``).  The API boundary
(``modules.core.exception_handler``) is the only place that turns them
into HTTP responses; ``status_code`` is the mapping it uses.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class DomainError(Exception):
    """Base class for every error a service may surface to the caller."""

    status_code: int = 500
    default_message: str = (
        "An unexpected server error occurred. Please try again later."
    )

    def __init__(self, message: Optional[str] = None, *, data: Any = None) -> None:
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class InvalidInput(DomainError):
    """Missing or malformed fields (caller error)."""

    status_code = 400
    default_message = "The request contains invalid or missing fields."


class Unauthenticated(DomainError):
    status_code = 401
    default_message = "Authentication required: No token provided."


class InvalidToken(Unauthenticated):
    default_message = "Invalid token. Please log in again."


class ExpiredToken(Unauthenticated):
    default_message = "Your token has expired. Please log in again."


class UserNotFound(Unauthenticated):
    default_message = "Authentication failed: User not found for this token."


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid email or password."


class Forbidden(DomainError):
    """The caller is authenticated but not allowed to do this.

    ``action`` and ``required_roles`` are kept for the logs only; the
    response never echoes them.
    """

    status_code = 403
    default_message = (
        "Authorization failed: You do not have the necessary permissions "
        "for this action."
    )

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        action: Optional[str] = None,
        required_roles: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.action = action
        self.required_roles = tuple(required_roles)


class UserInactive(Forbidden):
    default_message = "Your account is currently inactive. Please contact support."


class NotFound(DomainError):
    status_code = 404
    default_message = "The requested resource was not found."


class Conflict(DomainError):
    """A uniqueness rule was violated."""

    status_code = 409
    default_message = "A record with this value already exists."


class DuplicateEmail(Conflict):
    default_message = "This email is already registered."


class FailedDependency(DomainError):
    """An external system was unreachable or rejected the request."""

    status_code = 424
    default_message = "An external dependency failed to process the request."


class WarrantyExpired(DomainError):
    status_code = 400
    default_message = (
        "This product is no longer eligible for a warranty claim as warranty "
        "period has expired."
    )


class Unexpected(DomainError):
    status_code = 500
