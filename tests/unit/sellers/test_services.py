"""Unit tests for SellerService.

Covers:
- provision_seller: self-service forced to PENDING without integration
  fields, admin creation keeps them, duplicate email, rollback translation.
- request_deactivation: happy path, already deactivated.
- set_contract_status: unknown value, change vs no-op audit.
- admin_update: nulls written as empty strings.
"""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.accounts.dtos import RegisterUserDTO
from modules.accounts.models import Role
from modules.core.exceptions import Conflict, DuplicateEmail, InvalidInput
from modules.sellers.constants import ContractStatus
from modules.sellers.dtos import (
    AdminUpdateSellerDTO,
    ProvisionSellerDTO,
    UpdateSellerProfileDTO,
)
from modules.sellers.exceptions import AlreadyDeactivated, SellerNotFound
from modules.sellers.services import SellerService

pytestmark = pytest.mark.unit


@pytest.fixture()
def user_repo():
    repo = MagicMock()
    repo.get_by_email.return_value = None
    return repo


@pytest.fixture()
def seller_repo():
    repo = MagicMock()
    repo.create.side_effect = lambda data: MagicMock(id=uuid.uuid4(), **data)
    return repo


@pytest.fixture()
def audit():
    return MagicMock()


@pytest.fixture()
def service(user_repo, seller_repo, audit):
    return SellerService(
        user_repository=user_repo, seller_repository=seller_repo, audit_log=audit
    )


def _dto(**overrides) -> ProvisionSellerDTO:
    data = {
        "owner": RegisterUserDTO(
            name="Owner",
            email="owner@shop.com",
            password="secret-1",
            phone_number="+15550002",
        ),
        "shop_name": "Gadget Shop",
        "business_email": "sales@shop.com",
        "business_phone_number": "+15550003",
        "contract_status": ContractStatus.ACTIVE,
        "api_base_url": "https://shop.example.com",
        "api_key": "k-123",
    }
    data.update(overrides)
    return ProvisionSellerDTO(**data)


def _seller(status=ContractStatus.ACTIVE):
    seller = MagicMock(id=uuid.uuid4())
    seller.contract_status = status
    return seller


class TestProvisionSeller:
    def test_self_service_is_pending_without_integration(
        self, service, user_repo, seller_repo, audit
    ):
        service.provision_seller(_dto())

        assert user_repo.create.call_args.args[0]["role"] == Role.SELLER
        data = seller_repo.create.call_args.args[0]
        assert data["contract_status"] == ContractStatus.PENDING
        assert data["api_base_url"] == ""
        assert data["api_key"] == ""
        assert audit.record.call_args.args[0] == "SELLER_REGISTERED"

    def test_admin_creation_keeps_status_and_integration(
        self, service, seller_repo, audit
    ):
        service.provision_seller(_dto(), by_admin=True)

        data = seller_repo.create.call_args.args[0]
        assert data["contract_status"] == ContractStatus.ACTIVE
        assert data["api_base_url"] == "https://shop.example.com"
        assert data["api_key"] == "k-123"
        assert audit.record.call_args.args[0] == "SELLER_CREATED_BY_ADMIN"

    def test_profile_is_linked_to_new_user(self, service, user_repo, seller_repo):
        service.provision_seller(_dto())
        assert seller_repo.create.call_args.args[0]["user"] is user_repo.create.return_value

    def test_duplicate_email(self, service, user_repo, seller_repo):
        user_repo.get_by_email.return_value = MagicMock()
        with pytest.raises(DuplicateEmail):
            service.provision_seller(_dto())
        user_repo.create.assert_not_called()
        seller_repo.create.assert_not_called()

    def test_seller_insert_failure_is_translated(self, service, seller_repo, audit):
        seller_repo.create.side_effect = IntegrityError(
            "UNIQUE constraint failed: sellers.user_id"
        )
        with pytest.raises(Conflict):
            service.provision_seller(_dto())
        audit.record.assert_not_called()


class TestRequestDeactivation:
    def test_deactivates(self, service, seller_repo, audit):
        seller = _seller(ContractStatus.ACTIVE)
        seller_repo.get_for_update.return_value = seller

        service.request_deactivation(seller.id)

        assert seller.contract_status == ContractStatus.DEACTIVATED
        seller.save.assert_called_once_with(update_fields=["contract_status"])
        assert audit.record.call_args.args[3] == {"previousStatus": ContractStatus.ACTIVE}

    def test_already_deactivated(self, service, seller_repo):
        seller_repo.get_for_update.return_value = _seller(ContractStatus.DEACTIVATED)
        with pytest.raises(AlreadyDeactivated):
            service.request_deactivation(uuid.uuid4())

    def test_not_found(self, service, seller_repo):
        seller_repo.get_for_update.return_value = None
        with pytest.raises(SellerNotFound):
            service.request_deactivation(uuid.uuid4())


class TestContractStatus:
    def test_unknown_status(self, service, seller_repo):
        with pytest.raises(InvalidInput) as info:
            service.set_contract_status(uuid.uuid4(), "PAUSED")
        assert "PENDING" in info.value.message
        seller_repo.get_for_update.assert_not_called()

    def test_change_is_written_and_audited(self, service, seller_repo, audit):
        seller = _seller(ContractStatus.PENDING)
        seller_repo.get_for_update.return_value = seller

        service.set_contract_status(seller.id, "ACTIVE")

        assert seller.contract_status == "ACTIVE"
        seller.save.assert_called_once()
        assert audit.record.call_args.args[0] == "SELLER_CONTRACT_STATUS_UPDATED"

    def test_same_status_is_a_noop(self, service, seller_repo, audit):
        seller = _seller(ContractStatus.ACTIVE)
        seller_repo.get_for_update.return_value = seller

        service.set_contract_status(seller.id, "ACTIVE")

        seller.save.assert_not_called()
        assert audit.record.call_args.args[0] == "SELLER_CONTRACT_STATUS_NO_CHANGE"


class TestUpdates:
    def test_profile_update_requires_fields(self, service):
        with pytest.raises(InvalidInput):
            service.update_profile(uuid.uuid4(), UpdateSellerProfileDTO())

    def test_profile_update_writes_only_supplied(self, service, seller_repo):
        seller_repo.update_fields.return_value = _seller()
        service.update_profile(uuid.uuid4(), UpdateSellerProfileDTO(shop_name="New"))
        assert seller_repo.update_fields.call_args.args[1] == {"shop_name": "New"}

    def test_admin_update_null_becomes_empty(self, service, seller_repo):
        seller_repo.update_fields.return_value = _seller()
        service.admin_update(uuid.uuid4(), AdminUpdateSellerDTO(api_key=None))
        assert seller_repo.update_fields.call_args.args[1] == {"api_key": ""}

    def test_admin_update_missing_seller(self, service, seller_repo):
        seller_repo.update_fields.return_value = None
        with pytest.raises(SellerNotFound):
            service.admin_update(uuid.uuid4(), AdminUpdateSellerDTO(address="x"))
