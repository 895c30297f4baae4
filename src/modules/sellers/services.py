"""Seller service layer (Use Cases).

Owns the account provisioning transaction: a seller is a ``User`` row
(role SELLER) plus a ``Seller`` row, and the two are only ever written
together inside one ``transaction.atomic()`` block.

Business rules enforced:
- Self-registered sellers start PENDING without API integration fields.
- Admin-created sellers get an explicit contract status and optional
  integration fields.
- A seller may only move their own contract to DEACTIVATED.
- Every mutation is audited after it commits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction

from modules.accounts.models import Role
from modules.audit.context import SYSTEM, AuditContext
from modules.core.exceptions import DuplicateEmail, InvalidInput
from modules.core.integrity import translate_integrity_error
from modules.sellers.constants import ContractStatus
from modules.sellers.exceptions import AlreadyDeactivated, SellerNotFound

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.audit.services import AuditLog
    from modules.sellers.dtos import (
        AdminUpdateSellerDTO,
        ProvisionSellerDTO,
        UpdateSellerProfileDTO,
    )
    from modules.sellers.models import Seller
    from modules.sellers.repositories.interfaces import ISellerRepository

logger = structlog.get_logger(__name__)


class SellerService:
    """Application service for Seller use-cases.

    Receives repositories and the audit sink via constructor injection.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        seller_repository: ISellerRepository,
        audit_log: AuditLog,
    ) -> None:
        self._users = user_repository
        self._sellers = seller_repository
        self._audit = audit_log

    # ------------------------------------------------------------------
    # Provisioning
    # ------------------------------------------------------------------

    def provision_seller(
        self,
        dto: ProvisionSellerDTO,
        context: AuditContext = SYSTEM,
        *,
        by_admin: bool = False,
    ) -> Seller:
        """Create the SELLER user and its profile atomically.

        Self-service registration (``by_admin=False``) always lands in
        PENDING with no integration fields, whatever the DTO says.

        Raises:
            DuplicateEmail: the owner's email is taken (pre-check or
                storage constraint).
            Conflict: any other uniqueness violation.
        """
        if not by_admin:
            dto = dto.model_copy(
                update={
                    "contract_status": ContractStatus.PENDING,
                    "api_base_url": "",
                    "api_key": "",
                }
            )

        log = logger.bind(email=dto.owner.email, by_admin=by_admin)
        if self._users.get_by_email(dto.owner.email):
            log.warning("seller.provision_duplicate_email")
            raise DuplicateEmail()

        try:
            with transaction.atomic():
                user = self._users.create(
                    {
                        "name": dto.owner.name,
                        "email": dto.owner.email,
                        "password": dto.owner.password,
                        "phone_number": dto.owner.phone_number,
                        "address": dto.owner.address,
                        "role": Role.SELLER,
                    }
                )
                seller = self._sellers.create(
                    {
                        "user": user,
                        "shop_name": dto.shop_name,
                        "business_name": dto.business_name,
                        "business_email": dto.business_email,
                        "business_phone_number": dto.business_phone_number,
                        "address": dto.address,
                        "contract_status": dto.contract_status,
                        "api_base_url": dto.api_base_url,
                        "api_key": dto.api_key,
                    }
                )
        except IntegrityError as exc:
            log.warning("seller.provision_rolled_back", error=str(exc))
            conflict = translate_integrity_error(exc)
            if conflict is None:
                raise
            raise conflict from exc

        log.info("seller.provisioned", seller_id=str(seller.id))
        self._audit.record(
            "SELLER_CREATED_BY_ADMIN" if by_admin else "SELLER_REGISTERED",
            "SELLER",
            seller.id,
            {
                "email": dto.owner.email,
                "shopName": dto.shop_name,
                "contractStatus": seller.contract_status,
            },
            context,
        )
        return seller

    # ------------------------------------------------------------------
    # Seller self-service
    # ------------------------------------------------------------------

    def get_seller(self, seller_id: UUID) -> Seller:
        seller = self._sellers.get_by_id(str(seller_id))
        if seller is None:
            raise SellerNotFound()
        return seller

    def update_profile(
        self,
        seller_id: UUID,
        dto: UpdateSellerProfileDTO,
        context: AuditContext = SYSTEM,
    ) -> Seller:
        changes = dto.changes()
        if not changes:
            raise InvalidInput("No valid fields provided for seller profile update.")
        seller = self._apply(seller_id, changes)
        self._audit.record(
            "SELLER_PROFILE_UPDATED",
            "SELLER",
            seller.id,
            {"fields": sorted(changes)},
            context,
        )
        return seller

    def request_deactivation(
        self, seller_id: UUID, context: AuditContext = SYSTEM
    ) -> Seller:
        with transaction.atomic():
            seller = self._sellers.get_for_update(str(seller_id))
            if seller is None:
                raise SellerNotFound()
            if seller.contract_status == ContractStatus.DEACTIVATED:
                raise AlreadyDeactivated()
            previous = seller.contract_status
            seller.contract_status = ContractStatus.DEACTIVATED
            seller.save(update_fields=["contract_status"])

        logger.info("seller.deactivation_requested", seller_id=str(seller_id))
        self._audit.record(
            "SELLER_DEACTIVATION_REQUESTED",
            "SELLER",
            seller.id,
            {"previousStatus": previous},
            context,
        )
        return seller

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def admin_update(
        self,
        seller_id: UUID,
        dto: AdminUpdateSellerDTO,
        context: AuditContext = SYSTEM,
    ) -> Seller:
        changes = dto.changes()
        if not changes:
            raise InvalidInput("No valid fields provided for seller update.")
        for field in ("business_name", "address", "api_base_url", "api_key"):
            if field in changes and changes[field] is None:
                changes[field] = ""
        seller = self._apply(seller_id, changes)
        self._audit.record(
            "SELLER_UPDATED_BY_ADMIN",
            "SELLER",
            seller.id,
            {
                "fields": sorted(changes),
                "performedByAdmin": str(context.actor_id),
            },
            context,
        )
        return seller

    def set_contract_status(
        self,
        seller_id: UUID,
        contract_status: str,
        context: AuditContext = SYSTEM,
    ) -> Seller:
        if contract_status not in ContractStatus.values:
            raise InvalidInput(
                "Invalid contract status. Must be one of: "
                f"{', '.join(ContractStatus.values)}."
            )
        with transaction.atomic():
            seller = self._sellers.get_for_update(str(seller_id))
            if seller is None:
                raise SellerNotFound()
            changed = seller.contract_status != contract_status
            if changed:
                seller.contract_status = contract_status
                seller.save(update_fields=["contract_status"])

        logger.info(
            "seller.contract_status_set",
            seller_id=str(seller_id),
            contract_status=contract_status,
            changed=changed,
        )
        self._audit.record(
            "SELLER_CONTRACT_STATUS_UPDATED"
            if changed
            else "SELLER_CONTRACT_STATUS_NO_CHANGE",
            "SELLER",
            seller.id,
            {
                "newStatus": contract_status,
                "performedByAdmin": str(context.actor_id),
            },
            context,
        )
        return seller

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_active(self) -> List[Seller]:
        return self._sellers.list({"contract_status": ContractStatus.ACTIVE})

    def list_for_customer(self, customer_id: UUID) -> List[Seller]:
        return self._sellers.list_for_customer(str(customer_id))

    def list_all(self) -> List[Seller]:
        return self._sellers.list()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(self, seller_id: UUID, changes: Dict[str, Any]) -> Seller:
        seller = self._sellers.update_fields(str(seller_id), changes)
        if seller is None:
            raise SellerNotFound()
        return seller
