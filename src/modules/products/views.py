"""Registered product API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.models import Role
from modules.accounts.permissions import role_required
from modules.accounts.repositories import UserDjangoRepository
from modules.audit.context import AuditContext
from modules.audit.services import AuditLog
from modules.core.responses import envelope
from modules.products.dtos import RegisterProductDTO
from modules.products.repositories import RegisteredProductDjangoRepository
from modules.products.serializers import (
    CustomerProductSerializer,
    RegisterProductSerializer,
    SellerProductSerializer,
)
from modules.products.services import ProductRegistrationService
from modules.products.validation import SellerValidationClient
from modules.sellers.repositories import SellerDjangoRepository


def build_registration_service() -> ProductRegistrationService:
    return ProductRegistrationService(
        product_repository=RegisteredProductDjangoRepository(),
        seller_repository=SellerDjangoRepository(),
        user_repository=UserDjangoRepository(),
        validation_client=SellerValidationClient(),
        audit_log=AuditLog(),
    )


class _ProductView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_registration_service()


class ProductRegistrationView(_ProductView):
    """POST /api/v1/customer/products/register"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]
    throttle_scope = "product_registration"

    def post(self, request: Request) -> Response:
        serializer = RegisterProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = RegisterProductDTO(
            customer_id=request.user.user_id, **serializer.validated_data
        )
        outcome = self._service.register_product(
            dto, AuditContext.from_request(request)
        )
        return envelope(
            "Product registered successfully.",
            {
                "registeredProductId": str(outcome.registered_product_id),
                "productName": outcome.product_name,
                "warrantyValidUntil": outcome.warranty_valid_until.isoformat(),
            },
            status=status.HTTP_201_CREATED,
        )


class CustomerProductListView(_ProductView):
    """GET /api/v1/customer/products"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]

    def get(self, request: Request) -> Response:
        products = self._service.list_for_customer(request.user.user_id)
        data = CustomerProductSerializer(
            products, many=True, context={"today": self._service.today()}
        ).data
        return envelope("Registered products fetched successfully.", data)


class SellerProductListView(_ProductView):
    """GET /api/v1/seller/products"""

    permission_classes = [IsAuthenticated, role_required(Role.SELLER)]

    def get(self, request: Request) -> Response:
        products = self._service.list_for_seller(request.user.seller_id)
        data = SellerProductSerializer(
            products, many=True, context={"today": self._service.today()}
        ).data
        return envelope(
            "Products registered for your shop fetched successfully.", data
        )
