"""Product registration workflow (Use Case).

A customer claims a purchase (seller, order id, date); the seller's own
system confirms it and supplies the authoritative product data, from
which the warranty expiry is computed.

Each step below is a gate returning ``Ok``/``Err``; ``_run`` stops at
the first ``Err`` and ``register_product`` raises the carried error for
the API layer.  No row is written before the last step, so a customer
can safely resubmit after the seller's system rejected or timed out.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, List, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.accounts.exceptions import AccountNotFound
from modules.audit.context import SYSTEM, AuditContext
from modules.core.exceptions import DomainError
from modules.core.integrity import translate_integrity_error
from modules.products.dtos import RegistrationOutcome
from modules.products.exceptions import DuplicateRegistration, FuturePurchaseDate
from modules.products.warranty import warranty_expiry
from modules.sellers.exceptions import SellerNotConfigured, SellerNotFound
from shared.domain.result import Err, Ok, Result, unwrap

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.audit.services import AuditLog
    from modules.products.dtos import RegisterProductDTO, ValidatedPurchase
    from modules.products.models import RegisteredProduct
    from modules.products.repositories.interfaces import (
        IRegisteredProductRepository,
    )
    from modules.products.validation import SellerValidationClient
    from modules.sellers.models import Seller
    from modules.sellers.repositories.interfaces import ISellerRepository

logger = structlog.get_logger(__name__)


class ProductRegistrationService:
    """Application service for RegisteredProduct use-cases.

    Repositories, the seller validation client and the audit sink are
    injected; ``today`` can be swapped to pin the calendar in tests.
    """

    def __init__(
        self,
        product_repository: IRegisteredProductRepository,
        seller_repository: ISellerRepository,
        user_repository: IUserRepository,
        validation_client: SellerValidationClient,
        audit_log: AuditLog,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._products = product_repository
        self._sellers = seller_repository
        self._users = user_repository
        self._validator = validation_client
        self._audit = audit_log
        self._today = today or timezone.localdate

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def register_product(
        self, dto: RegisterProductDTO, context: AuditContext = SYSTEM
    ) -> RegistrationOutcome:
        """Register a purchase for warranty tracking.

        Raises:
            FuturePurchaseDate: claimed date after today.
            DuplicateRegistration: triple already registered (also when a
                concurrent request won the race).
            SellerNotFound / SellerNotConfigured: seller can't validate.
            FailedDependency: the seller's system rejected the purchase,
                was unreachable, or answered with unusable data.
        """
        log = logger.bind(
            customer_id=str(dto.customer_id),
            seller_id=str(dto.seller_id),
            order_id=dto.order_id,
        )
        log.info("product_registration.started")

        result = self._run(dto)
        if isinstance(result, Err):
            log.warning(
                "product_registration.rejected",
                error=type(result.error).__name__,
            )
        product = unwrap(result)

        log.info("product_registration.completed", product_id=str(product.id))
        self._audit.record(
            "PRODUCT_REGISTERED",
            "REGISTERED_PRODUCT",
            product.id,
            {
                "sellerId": str(dto.seller_id),
                "orderId": dto.order_id,
                "productName": product.product_name,
                "warrantyValidUntil": product.warranty_valid_until,
            },
            context,
        )
        return RegistrationOutcome(
            registered_product_id=product.id,
            product_name=product.product_name,
            warranty_valid_until=product.warranty_valid_until,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_for_customer(self, customer_id: UUID) -> List[RegisteredProduct]:
        return self._products.list_for_customer(str(customer_id))

    def list_for_seller(self, seller_id: UUID) -> List[RegisteredProduct]:
        return self._products.list_for_seller(str(seller_id))

    def today(self) -> date:
        return self._today()

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    def _run(self, dto: RegisterProductDTO) -> Result[RegisteredProduct, DomainError]:
        checked = self._check_purchase_date(dto)
        if isinstance(checked, Err):
            return checked

        checked = self._check_not_registered(dto)
        if isinstance(checked, Err):
            return checked

        seller = self._eligible_seller(dto.seller_id)
        if isinstance(seller, Err):
            return seller

        confirmed = self._confirm_with_seller(seller.value, dto)
        if isinstance(confirmed, Err):
            return confirmed

        return self._persist(dto, seller.value, confirmed.value)

    def _check_purchase_date(self, dto: RegisterProductDTO) -> Result[None, DomainError]:
        if dto.purchase_date > self._today():
            return Err(FuturePurchaseDate())
        return Ok(None)

    def _check_not_registered(self, dto: RegisterProductDTO) -> Result[None, DomainError]:
        existing = self._products.find_registration(
            str(dto.customer_id), str(dto.seller_id), dto.order_id
        )
        if existing is not None:
            return Err(DuplicateRegistration())
        return Ok(None)

    def _eligible_seller(self, seller_id: UUID) -> Result[Seller, DomainError]:
        seller = self._sellers.get_by_id(str(seller_id))
        if seller is None:
            return Err(SellerNotFound())
        if not seller.is_integration_ready:
            return Err(SellerNotConfigured())
        return Ok(seller)

    def _confirm_with_seller(
        self, seller: Seller, dto: RegisterProductDTO
    ) -> Result[ValidatedPurchase, DomainError]:
        customer = self._users.get_by_id(str(dto.customer_id))
        if customer is None:
            return Err(AccountNotFound())
        return self._validator.validate(
            seller,
            order_id=dto.order_id,
            customer_phone=customer.phone_number,
            purchase_date=dto.purchase_date,
        )

    def _persist(
        self,
        dto: RegisterProductDTO,
        seller: Seller,
        purchase: ValidatedPurchase,
    ) -> Result[RegisteredProduct, DomainError]:
        try:
            with transaction.atomic():
                product = self._products.create(
                    {
                        "customer_id": dto.customer_id,
                        "seller": seller,
                        "seller_order_id": dto.order_id,
                        "customer_phone_at_sale": purchase.customer_phone_number,
                        "product_name": purchase.product_name,
                        "price": purchase.price,
                        "purchase_date": purchase.authoritative_purchase_date,
                        "warranty_valid_until": warranty_expiry(
                            purchase.authoritative_purchase_date,
                            purchase.warranty_period_months,
                        ),
                    }
                )
        except IntegrityError as exc:
            if translate_integrity_error(exc) is None:
                raise
            return Err(DuplicateRegistration())
        return Ok(product)
