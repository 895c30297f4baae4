"""Seller API views.

Self-service registration, the seller's own profile, the customer-facing
seller lists and the admin seller management endpoints.  All go through
``SellerService``; domain exceptions propagate to the core handler.
"""

from __future__ import annotations

from typing import Any, Dict
from uuid import UUID

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.dtos import RegisterUserDTO
from modules.accounts.models import Role
from modules.accounts.permissions import role_required
from modules.accounts.repositories import UserDjangoRepository
from modules.audit.context import AuditContext
from modules.audit.services import AuditLog
from modules.core.responses import envelope
from modules.sellers.dtos import (
    AdminUpdateSellerDTO,
    ProvisionSellerDTO,
    UpdateSellerProfileDTO,
)
from modules.sellers.repositories import SellerDjangoRepository
from modules.sellers.serializers import (
    AdminCreateSellerSerializer,
    AdminSellerSerializer,
    AdminUpdateSellerSerializer,
    ContractStatusSerializer,
    RegisterSellerSerializer,
    SellerSerializer,
    SellerSummarySerializer,
    UpdateSellerProfileSerializer,
)
from modules.sellers.services import SellerService

_OWNER_FIELDS = ("name", "email", "password", "phone_number")


def build_seller_service() -> SellerService:
    return SellerService(
        user_repository=UserDjangoRepository(),
        seller_repository=SellerDjangoRepository(),
        audit_log=AuditLog(),
    )


def _provision_dto(data: Dict[str, Any]) -> ProvisionSellerDTO:
    fields = dict(data)
    owner = RegisterUserDTO(
        **{name: fields.pop(name) for name in _OWNER_FIELDS},
        address=fields.get("address", ""),
    )
    return ProvisionSellerDTO(owner=owner, **fields)


class _SellerView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_seller_service()


class RegisterSellerView(_SellerView):
    """POST /api/v1/auth/register/seller"""

    authentication_classes: list = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = RegisterSellerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seller = self._service.provision_seller(
            _provision_dto(serializer.validated_data),
            AuditContext.from_request(request),
        )
        return envelope(
            "Seller registered successfully. Awaiting admin approval.",
            {"sellerId": str(seller.id)},
            status=status.HTTP_201_CREATED,
        )


# ----------------------------------------------------------------------
# Seller
# ----------------------------------------------------------------------


class SellerProfileView(_SellerView):
    """GET/PUT/PATCH /api/v1/seller/profile"""

    permission_classes = [IsAuthenticated, role_required(Role.SELLER)]

    def get(self, request: Request) -> Response:
        seller = self._service.get_seller(request.user.seller_id)
        return envelope(
            "Seller profile fetched successfully.", SellerSerializer(seller).data
        )

    def put(self, request: Request) -> Response:
        serializer = UpdateSellerProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seller = self._service.update_profile(
            request.user.seller_id,
            UpdateSellerProfileDTO(**serializer.validated_data),
            AuditContext.from_request(request),
        )
        return envelope(
            "Seller profile updated successfully.", SellerSerializer(seller).data
        )

    patch = put


class SellerDeactivationView(_SellerView):
    """POST /api/v1/seller/deactivate-request"""

    permission_classes = [IsAuthenticated, role_required(Role.SELLER)]

    def post(self, request: Request) -> Response:
        self._service.request_deactivation(
            request.user.seller_id, AuditContext.from_request(request)
        )
        return envelope(
            "Seller account deactivation requested successfully. "
            "Admin will review."
        )


# ----------------------------------------------------------------------
# Customer
# ----------------------------------------------------------------------


class ActiveSellerListView(_SellerView):
    """GET /api/v1/customer/sellers"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]

    def get(self, request: Request) -> Response:
        sellers = self._service.list_active()
        return envelope(
            "Active sellers fetched successfully.",
            SellerSummarySerializer(sellers, many=True).data,
        )


class CustomerSellerListView(_SellerView):
    """GET /api/v1/customer/my-sellers"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]

    def get(self, request: Request) -> Response:
        sellers = self._service.list_for_customer(request.user.user_id)
        return envelope(
            "Your sellers fetched successfully.",
            SellerSummarySerializer(sellers, many=True).data,
        )


# ----------------------------------------------------------------------
# Admin
# ----------------------------------------------------------------------


class AdminSellerListView(_SellerView):
    """GET/POST /api/v1/admin/sellers"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def get(self, request: Request) -> Response:
        sellers = self._service.list_all()
        return envelope(
            "Sellers fetched successfully.",
            AdminSellerSerializer(sellers, many=True).data,
        )

    def post(self, request: Request) -> Response:
        serializer = AdminCreateSellerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seller = self._service.provision_seller(
            _provision_dto(serializer.validated_data),
            AuditContext.from_request(request),
            by_admin=True,
        )
        return envelope(
            "Seller created successfully by admin.",
            {"sellerId": str(seller.id)},
            status=status.HTTP_201_CREATED,
        )


class AdminSellerDetailView(_SellerView):
    """PUT/PATCH /api/v1/admin/sellers/{seller_id}"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def put(self, request: Request, seller_id: UUID) -> Response:
        serializer = AdminUpdateSellerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seller = self._service.admin_update(
            seller_id,
            AdminUpdateSellerDTO(**serializer.validated_data),
            AuditContext.from_request(request),
        )
        return envelope(
            "Seller details updated successfully.",
            AdminSellerSerializer(seller).data,
        )

    patch = put


class AdminSellerStatusView(_SellerView):
    """PUT /api/v1/admin/sellers/{seller_id}/status"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def put(self, request: Request, seller_id: UUID) -> Response:
        serializer = ContractStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seller = self._service.set_contract_status(
            seller_id,
            serializer.validated_data["contract_status"],
            AuditContext.from_request(request),
        )
        return envelope(
            "Seller contract status updated successfully.",
            AdminSellerSerializer(seller).data,
        )
