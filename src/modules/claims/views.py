"""Warranty claim API views.

Customers file and read their claims; sellers read and move claims on
their products; admins may move any claim.  All go through
``ClaimService``; domain exceptions propagate to the core handler.
"""

from __future__ import annotations

from uuid import UUID

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.models import Role
from modules.accounts.permissions import role_required
from modules.audit.context import AuditContext
from modules.audit.services import AuditLog
from modules.claims.dtos import CreateClaimDTO, TransitionClaimDTO
from modules.claims.filters import ClaimFilter
from modules.claims.repositories import ClaimDjangoRepository
from modules.claims.serializers import (
    ClaimSerializer,
    CreateClaimSerializer,
    TransitionClaimSerializer,
)
from modules.claims.services import ClaimService
from modules.core.exceptions import InvalidInput
from modules.core.responses import envelope
from modules.products.repositories import RegisteredProductDjangoRepository


def build_claim_service() -> ClaimService:
    return ClaimService(
        claim_repository=ClaimDjangoRepository(),
        product_repository=RegisteredProductDjangoRepository(),
        audit_log=AuditLog(),
    )


class _ClaimView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_claim_service()

    def _filtered(self, request: Request, queryset):
        filterset = ClaimFilter(request.query_params, queryset=queryset)
        if not filterset.is_valid():
            errors = {
                field: [str(message) for message in messages]
                for field, messages in filterset.errors.items()
            }
            raise InvalidInput("Invalid filter parameters.", data={"errors": errors})
        return filterset.qs


def _transition(service: ClaimService, request: Request, claim_id: UUID) -> Response:
    serializer = TransitionClaimSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    claim = service.transition_claim(
        request.user,
        claim_id,
        TransitionClaimDTO(**serializer.validated_data),
        AuditContext.from_request(request),
    )
    return envelope("Claim status updated successfully.", ClaimSerializer(claim).data)


# ----------------------------------------------------------------------
# Customer
# ----------------------------------------------------------------------


class CustomerClaimListView(_ClaimView):
    """GET/POST /api/v1/customer/claims"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]

    def get(self, request: Request) -> Response:
        claims = self._filtered(
            request, self._service.list_for_customer(request.user.user_id)
        )
        return envelope(
            "Warranty claims for your products fetched successfully.",
            ClaimSerializer(claims, many=True).data,
        )

    def post(self, request: Request) -> Response:
        serializer = CreateClaimSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        claim = self._service.create_claim(
            CreateClaimDTO(
                customer_id=request.user.user_id, **serializer.validated_data
            ),
            AuditContext.from_request(request),
        )
        return envelope(
            "Warranty claim submitted successfully. Seller has been notified.",
            {"claimId": str(claim.id), "claimStatus": claim.status},
            status=status.HTTP_201_CREATED,
        )


class CustomerClaimDetailView(_ClaimView):
    """GET /api/v1/customer/claims/{claim_id}"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]

    def get(self, request: Request, claim_id: UUID) -> Response:
        claim = self._service.get_for_customer(request.user.user_id, claim_id)
        return envelope(
            "Warranty claim details fetched successfully.",
            ClaimSerializer(claim).data,
        )


# ----------------------------------------------------------------------
# Seller
# ----------------------------------------------------------------------


class SellerClaimListView(_ClaimView):
    """GET /api/v1/seller/claims[?status=...]"""

    permission_classes = [IsAuthenticated, role_required(Role.SELLER)]

    def get(self, request: Request) -> Response:
        claims = self._filtered(
            request, self._service.list_for_seller(request.user.seller_id)
        )
        return envelope(
            "Warranty claims for your products fetched successfully.",
            ClaimSerializer(claims, many=True).data,
        )


class SellerClaimDetailView(_ClaimView):
    """GET/PUT /api/v1/seller/claims/{claim_id}"""

    permission_classes = [IsAuthenticated, role_required(Role.SELLER)]

    def get(self, request: Request, claim_id: UUID) -> Response:
        claim = self._service.get_for_seller(request.user.seller_id, claim_id)
        return envelope(
            "Warranty claim details fetched successfully.",
            ClaimSerializer(claim).data,
        )

    def put(self, request: Request, claim_id: UUID) -> Response:
        return _transition(self._service, request, claim_id)


# ----------------------------------------------------------------------
# Admin
# ----------------------------------------------------------------------


class AdminClaimStatusView(_ClaimView):
    """PUT /api/v1/admin/claims/{claim_id}"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def put(self, request: Request, claim_id: UUID) -> Response:
        return _transition(self._service, request, claim_id)
