"""Warranty claim lifecycle (Use Cases).

Customers file claims on their own products while the warranty runs;
the seller that sold the product (or an admin) moves the claim between
statuses.  Writes lock the product row first, then the claim row, so
creation and transitions on the same product serialize in one order.

Business rules enforced:
- Only the owning customer may file, and only while
  ``warranty_valid_until >= today``.
- At most one claim per product outside RESOLVED/DENIED.
- DENIED requires non-blank response notes.
- A seller may only touch claims on their own products; admins may
  touch any claim.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.accounts.identity import AdminIdentity, SellerIdentity
from modules.audit.context import SYSTEM, AuditContext
from modules.claims.constants import TERMINAL_STATES, ClaimStatus
from modules.claims.exceptions import (
    ActiveClaimExists,
    ClaimNotFound,
    DenialNotesRequired,
    InvalidClaimStatus,
    NotClaimOwner,
    NotProductOwner,
    NotSellerClaim,
)
from modules.core.exceptions import Forbidden, WarrantyExpired
from modules.core.integrity import translate_integrity_error
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.identity import Identity
    from modules.audit.services import AuditLog
    from modules.claims.dtos import CreateClaimDTO, TransitionClaimDTO
    from modules.claims.models import WarrantyClaim
    from modules.claims.repositories.interfaces import IClaimRepository
    from modules.products.repositories.interfaces import (
        IRegisteredProductRepository,
    )

logger = structlog.get_logger(__name__)


def _active_claim_conflict(claim: WarrantyClaim) -> ActiveClaimExists:
    return ActiveClaimExists(
        f"An active claim (Status: {claim.status}) already exists for this product."
    )


class ClaimService:
    """Application service for WarrantyClaim use-cases.

    Receives repositories and the audit sink via constructor injection.
    """

    def __init__(
        self,
        claim_repository: IClaimRepository,
        product_repository: IRegisteredProductRepository,
        audit_log: AuditLog,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._claims = claim_repository
        self._products = product_repository
        self._audit = audit_log
        self._today = today or timezone.localdate

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_claim(
        self, dto: CreateClaimDTO, context: AuditContext = SYSTEM
    ) -> WarrantyClaim:
        """File a new claim in REQUESTED.

        Raises:
            ProductNotFound: no such registered product.
            NotProductOwner: the product belongs to another customer.
            WarrantyExpired: the warranty ended before today.
            ActiveClaimExists: a non-terminal claim is already open.
        """
        log = logger.bind(
            customer_id=str(dto.customer_id),
            product_id=str(dto.registered_product_id),
        )
        try:
            with transaction.atomic():
                product = self._products.get_for_update(str(dto.registered_product_id))
                if product is None:
                    raise ProductNotFound()
                if str(product.customer_id) != str(dto.customer_id):
                    raise NotProductOwner()
                if not product.is_under_warranty(self._today()):
                    log.info("claim.warranty_expired")
                    raise WarrantyExpired()

                active = self._claims.find_active_for_product(str(product.id))
                if active is not None:
                    raise _active_claim_conflict(active)

                claim = self._claims.create(
                    {
                        "registered_product": product,
                        "customer_id": dto.customer_id,
                        "issue_description": dto.issue_description,
                        "status": ClaimStatus.REQUESTED,
                    }
                )
        except IntegrityError as exc:
            conflict = translate_integrity_error(exc)
            if conflict is None:
                raise
            log.warning("claim.create_race_lost")
            raise conflict from exc

        log.info("claim.created", claim_id=str(claim.id))
        self._audit.record(
            "CLAIM_CREATED",
            "WARRANTY_CLAIM",
            claim.id,
            {"registeredProductId": str(product.id)},
            context,
        )
        return claim

    def transition_claim(
        self,
        actor: Identity,
        claim_id: UUID,
        dto: TransitionClaimDTO,
        context: AuditContext = SYSTEM,
    ) -> WarrantyClaim:
        """Move a claim to ``dto.status``.

        Notes are written only when supplied; omitting them keeps the
        current notes.

        Raises:
            InvalidClaimStatus: unknown target status.
            DenialNotesRequired: DENIED without notes.
            ClaimNotFound: no such claim.
            NotSellerClaim / Forbidden: actor may not touch this claim.
            ActiveClaimExists: reopening while another claim is open.
        """
        if dto.status not in ClaimStatus.values:
            raise InvalidClaimStatus(
                "Invalid claim status. Must be one of: "
                f"{', '.join(ClaimStatus.values)}."
            )
        notes = dto.seller_response_notes
        if dto.status == ClaimStatus.DENIED and not (notes and notes.strip()):
            raise DenialNotesRequired()

        log = logger.bind(
            claim_id=str(claim_id),
            actor_role=actor.role,
            new_status=dto.status,
        )

        snapshot = self._claims.get_by_id(str(claim_id))
        if snapshot is None:
            raise ClaimNotFound()
        self._check_can_manage(actor, snapshot)

        try:
            with transaction.atomic():
                self._products.get_for_update(str(snapshot.registered_product_id))
                claim = self._claims.get_for_update(str(claim_id))
                if claim is None:
                    raise ClaimNotFound()

                previous = claim.status
                if previous in TERMINAL_STATES and dto.status not in TERMINAL_STATES:
                    other = self._claims.find_active_for_product(
                        str(claim.registered_product_id), exclude_id=str(claim.id)
                    )
                    if other is not None:
                        raise _active_claim_conflict(other)

                claim.status = dto.status
                claim.last_status_update_at = timezone.now()
                update_fields = ["status", "last_status_update_at"]
                if dto.notes_supplied:
                    claim.seller_response_notes = notes
                    update_fields.append("seller_response_notes")
                claim.save(update_fields=update_fields)
        except IntegrityError as exc:
            conflict = translate_integrity_error(exc)
            if conflict is None:
                raise
            log.warning("claim.transition_race_lost")
            raise conflict from exc

        log.info("claim.status_updated", previous_status=previous)
        self._audit.record(
            "CLAIM_STATUS_UPDATED",
            "WARRANTY_CLAIM",
            claim.id,
            {
                "previousStatus": previous,
                "newStatus": dto.status,
                "performedBy": actor.role,
            },
            context,
        )
        return claim

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_for_customer(self, customer_id: UUID, claim_id: UUID) -> WarrantyClaim:
        claim = self._claims.get_by_id(str(claim_id))
        if claim is None:
            raise ClaimNotFound()
        if str(claim.registered_product.customer_id) != str(customer_id):
            raise NotClaimOwner()
        return claim

    def get_for_seller(self, seller_id: UUID, claim_id: UUID) -> WarrantyClaim:
        claim = self._claims.get_by_id(str(claim_id))
        if claim is None:
            raise ClaimNotFound()
        if str(claim.registered_product.seller_id) != str(seller_id):
            raise NotSellerClaim()
        return claim

    def list_for_customer(self, customer_id: UUID) -> QuerySet:
        return self._claims.for_customer(str(customer_id))

    def list_for_seller(self, seller_id: UUID) -> QuerySet:
        return self._claims.for_seller(str(seller_id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_can_manage(actor: Identity, claim: WarrantyClaim) -> None:
        if isinstance(actor, AdminIdentity):
            return
        if isinstance(actor, SellerIdentity):
            if str(claim.registered_product.seller_id) != str(actor.seller_id):
                raise NotSellerClaim()
            return
        raise Forbidden(action="transition_claim", required_roles=("SELLER", "ADMIN"))
