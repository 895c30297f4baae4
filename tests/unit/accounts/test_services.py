"""Unit tests for AccountService.

Covers:
- register_customer: happy path, duplicate email (pre-check and storage race).
- register_initial_admin: first time only.
- login: missing fields, wrong password, inactive user, token issued.
- update_profile: empty update, explicit null clears address.
- set_active: self-change refused, not found, no-op audited separately.
"""

from __future__ import annotations

import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.accounts.dtos import RegisterUserDTO, UpdateProfileDTO
from modules.accounts.exceptions import (
    AccountNotFound,
    AdminAlreadyRegistered,
    SelfStatusChange,
)
from modules.accounts.models import Role
from modules.accounts.services import AccountService
from modules.audit.context import AuditContext
from modules.core.exceptions import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidInput,
    UserInactive,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.get_by_email.return_value = None
    repo.save.side_effect = lambda user: user
    return repo


@pytest.fixture()
def mock_tokens():
    tokens = MagicMock()
    tokens.issue.return_value = "signed.jwt.token"
    return tokens


@pytest.fixture()
def mock_audit():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, mock_tokens, mock_audit):
    return AccountService(
        user_repository=mock_repo, token_service=mock_tokens, audit_log=mock_audit
    )


def _dto(**overrides) -> RegisterUserDTO:
    data = {
        "name": "Ana Souza",
        "email": "Ana@Example.com",
        "password": "secret-1",
        "phone_number": "+15550001",
    }
    data.update(overrides)
    return RegisterUserDTO(**data)


def _user(**overrides):
    fields = {
        "id": uuid.uuid4(),
        "email": "ana@example.com",
        "name": "Ana Souza",
        "address": "",
        "role": Role.CUSTOMER,
        "is_active": True,
    }
    fields.update(overrides)
    user = SimpleNamespace(**fields)
    user.check_password = MagicMock(return_value=True)
    return user


class TestRegisterCustomer:
    def test_success_creates_customer_and_audits(self, service, mock_repo, mock_audit):
        created = _user()
        mock_repo.create.return_value = created

        user = service.register_customer(_dto())

        assert user is created
        data = mock_repo.create.call_args.args[0]
        assert data["role"] == Role.CUSTOMER
        assert data["email"] == "ana@example.com"
        assert mock_audit.record.call_args.args[0] == "CUSTOMER_REGISTERED"

    def test_duplicate_email_precheck(self, service, mock_repo):
        mock_repo.get_by_email.return_value = _user()
        with pytest.raises(DuplicateEmail):
            service.register_customer(_dto())
        mock_repo.create.assert_not_called()

    def test_duplicate_email_race_translated(self, service, mock_repo, mock_audit):
        mock_repo.create.side_effect = IntegrityError(
            "UNIQUE constraint failed: users.email"
        )
        with pytest.raises(DuplicateEmail):
            service.register_customer(_dto())
        mock_audit.record.assert_not_called()

    def test_other_integrity_errors_propagate(self, service, mock_repo, mock_audit):
        mock_repo.create.side_effect = IntegrityError(
            "NOT NULL constraint failed: users.phone_number"
        )
        with pytest.raises(IntegrityError):
            service.register_customer(_dto())
        mock_audit.record.assert_not_called()


class TestRegisterInitialAdmin:
    def test_first_admin_is_created(self, service, mock_repo, mock_audit):
        mock_repo.admin_exists.return_value = False
        admin = _user(role=Role.ADMIN)
        mock_repo.create.return_value = admin

        service.register_initial_admin(_dto(), AuditContext(origin="10.0.0.1"))

        assert mock_repo.create.call_args.args[0]["role"] == Role.ADMIN
        context = mock_audit.record.call_args.args[4]
        assert context.actor_id == admin.id
        assert context.origin == "10.0.0.1"

    def test_refused_once_admin_exists(self, service, mock_repo):
        mock_repo.admin_exists.return_value = True
        with pytest.raises(AdminAlreadyRegistered):
            service.register_initial_admin(_dto())
        mock_repo.create.assert_not_called()

    def test_setup_lock_taken_before_existence_check(self, service, mock_repo):
        mock_repo.admin_exists.return_value = False
        mock_repo.create.return_value = _user(role=Role.ADMIN)

        service.register_initial_admin(_dto())

        names = [c[0] for c in mock_repo.mock_calls]
        assert names.index("lock_admin_setup") < names.index("admin_exists")
        assert names.index("admin_exists") < names.index("create")


class TestLogin:
    @pytest.mark.parametrize("email, password", [("", "x"), ("a@b.com", "")])
    def test_missing_fields(self, service, email, password):
        with pytest.raises(InvalidInput):
            service.login(email, password)

    def test_unknown_email(self, service, mock_repo):
        with pytest.raises(InvalidCredentials):
            service.login("nobody@example.com", "secret-1")

    def test_wrong_password(self, service, mock_repo):
        user = _user()
        user.check_password.return_value = False
        mock_repo.get_by_email.return_value = user
        with pytest.raises(InvalidCredentials):
            service.login("ana@example.com", "wrong")

    def test_inactive_user(self, service, mock_repo, mock_tokens):
        mock_repo.get_by_email.return_value = _user(is_active=False)
        with pytest.raises(UserInactive):
            service.login("ana@example.com", "secret-1")
        mock_tokens.issue.assert_not_called()

    def test_success_issues_token(self, service, mock_repo, mock_tokens):
        user = _user(role=Role.SELLER)
        mock_repo.get_by_email.return_value = user

        result = service.login("ana@example.com", "secret-1")

        assert result.token == "signed.jwt.token"
        assert result.user_id == user.id
        assert result.role == Role.SELLER
        mock_tokens.issue.assert_called_once_with(user.id, Role.SELLER)


class TestUpdateProfile:
    def test_no_fields(self, service):
        with pytest.raises(InvalidInput):
            service.update_profile(uuid.uuid4(), UpdateProfileDTO())

    def test_only_supplied_fields_change(self, service, mock_repo):
        user = _user(address="Old street")
        mock_repo.get_by_id.return_value = user

        service.update_profile(user.id, UpdateProfileDTO(name="New Name"))

        assert user.name == "New Name"
        assert user.address == "Old street"

    def test_explicit_null_clears_address(self, service, mock_repo):
        user = _user(address="Old street")
        mock_repo.get_by_id.return_value = user

        service.update_profile(user.id, UpdateProfileDTO(address=None))

        assert user.address == ""

    def test_missing_user(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(AccountNotFound):
            service.update_profile(uuid.uuid4(), UpdateProfileDTO(name="X"))


class TestSetActive:
    def test_admin_cannot_change_self(self, service):
        admin_id = uuid.uuid4()
        with pytest.raises(SelfStatusChange):
            service.set_active(admin_id, admin_id, False)

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(AccountNotFound):
            service.set_active(uuid.uuid4(), uuid.uuid4(), False)

    def test_deactivates(self, service, mock_repo, mock_audit):
        user = _user()
        mock_repo.get_by_id.return_value = user

        service.set_active(uuid.uuid4(), user.id, False)

        assert user.is_active is False
        mock_repo.save.assert_called_once_with(user)
        assert mock_audit.record.call_args.args[0] == "USER_STATUS_UPDATED"

    def test_no_change_is_audited_without_write(self, service, mock_repo, mock_audit):
        user = _user(is_active=True)
        mock_repo.get_by_id.return_value = user

        service.set_active(uuid.uuid4(), user.id, True)

        mock_repo.save.assert_not_called()
        assert mock_audit.record.call_args.args[0] == "USER_STATUS_UPDATE_NO_CHANGE"
