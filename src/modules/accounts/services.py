"""Account service layer (Use Cases).

Covers customer self-registration, the one-time admin setup, login,
profile maintenance and admin activation toggles.  Seller accounts are
created by ``modules.sellers.services.SellerService.provision_seller``
because they span two tables.

Business rules enforced:
- Email is unique (pre-check plus storage constraint).
- Only one bootstrap admin may be created through the setup endpoint.
- Inactive users cannot log in.
- An admin cannot deactivate their own account.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction

from modules.accounts.exceptions import (
    AccountNotFound,
    AdminAlreadyRegistered,
    SelfStatusChange,
)
from modules.accounts.models import Role
from modules.audit.context import SYSTEM, AuditContext
from modules.core.exceptions import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidInput,
    UserInactive,
)
from modules.core.integrity import translate_integrity_error

if TYPE_CHECKING:
    from modules.accounts.dtos import RegisterUserDTO, UpdateProfileDTO
    from modules.accounts.models import User
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.accounts.tokens import TokenService
    from modules.audit.services import AuditLog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user_id: UUID
    role: str


class AccountService:
    """Application service for User use-cases.

    Receives its repository, token issuer and audit sink via constructor
    injection (DIP).
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        token_service: TokenService,
        audit_log: AuditLog,
    ) -> None:
        self._users = user_repository
        self._tokens = token_service
        self._audit = audit_log

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def register_customer(
        self, dto: RegisterUserDTO, context: AuditContext = SYSTEM
    ) -> User:
        user = self._create_user(dto, Role.CUSTOMER)
        logger.info("account.customer_registered", user_id=str(user.id))
        self._audit.record(
            "CUSTOMER_REGISTERED",
            "USER",
            user.id,
            {"email": user.email},
            context,
        )
        return user

    def register_initial_admin(
        self, dto: RegisterUserDTO, context: AuditContext = SYSTEM
    ) -> User:
        """Create the first administrator; refused once one exists.

        The existence check and the insert share one transaction holding
        the setup lock, so concurrent calls create at most one admin.
        """
        with transaction.atomic():
            self._users.lock_admin_setup()
            if self._users.admin_exists():
                logger.warning("account.admin_already_exists")
                raise AdminAlreadyRegistered()
            user = self._create_user(dto, Role.ADMIN)

        logger.info("account.admin_registered", user_id=str(user.id))
        self._audit.record(
            "ADMIN_REGISTERED_INITIALLY",
            "USER",
            user.id,
            {"email": user.email, "name": user.name},
            AuditContext(actor_id=user.id, origin=context.origin),
        )
        return user

    def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue a bearer token.

        Raises:
            InvalidInput: email or password missing.
            InvalidCredentials: unknown email or wrong password.
            UserInactive: the account has been deactivated.
        """
        if not email or not password:
            raise InvalidInput("Please provide email and password.")

        user = self._users.get_by_email(email)
        if user is None or not user.check_password(password):
            logger.warning("account.login_failed")
            raise InvalidCredentials()
        if not user.is_active:
            raise UserInactive(
                "Your account has been deactivated. Please contact support."
            )

        token = self._tokens.issue(user.id, user.role)
        logger.info("account.logged_in", user_id=str(user.id), role=user.role)
        return LoginResult(token=token, user_id=user.id, role=user.role)

    def update_profile(
        self,
        user_id: UUID,
        dto: UpdateProfileDTO,
        context: AuditContext = SYSTEM,
    ) -> User:
        changes = dto.changes()
        if not changes:
            raise InvalidInput(
                "No fields provided to update. Please provide name or address."
            )

        user = self.get_profile(user_id)
        for field, value in changes.items():
            setattr(user, field, value if value is not None else "")
        user = self._users.save(user)

        self._audit.record(
            "USER_PROFILE_UPDATED",
            "USER",
            user.id,
            {"fields": sorted(changes)},
            context,
        )
        return user

    def set_active(
        self,
        admin_id: UUID,
        user_id: UUID,
        is_active: bool,
        context: AuditContext = SYSTEM,
    ) -> User:
        """Activate or deactivate an account (admin only)."""
        if str(admin_id) == str(user_id):
            raise SelfStatusChange()

        user = self._users.get_by_id(str(user_id))
        if user is None:
            raise AccountNotFound()

        changed = user.is_active != is_active
        if changed:
            user.is_active = is_active
            self._users.save(user)

        logger.info(
            "account.status_updated",
            user_id=str(user_id),
            is_active=is_active,
            changed=changed,
        )
        self._audit.record(
            "USER_STATUS_UPDATED" if changed else "USER_STATUS_UPDATE_NO_CHANGE",
            "USER",
            user.id,
            {"newStatus": is_active, "performedByAdmin": str(admin_id)},
            context,
        )
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_profile(self, user_id: UUID) -> User:
        user = self._users.get_by_id(str(user_id))
        if user is None:
            raise AccountNotFound("Profile not found.")
        return user

    def list_users(self) -> List[User]:
        return self._users.list()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _create_user(self, dto: RegisterUserDTO, role: str) -> User:
        if self._users.get_by_email(dto.email):
            raise DuplicateEmail()
        try:
            with transaction.atomic():
                return self._users.create(
                    {
                        "name": dto.name,
                        "email": dto.email,
                        "password": dto.password,
                        "phone_number": dto.phone_number,
                        "address": dto.address,
                        "role": role,
                    }
                )
        except IntegrityError as exc:
            conflict = translate_integrity_error(exc)
            if conflict is None:
                raise
            raise conflict from exc
