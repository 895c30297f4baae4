"""Account API views.

Thin HTTP adapters over ``AccountService``: parse the body with a DRF
serializer, build the DTO, call the service and wrap the result in the
response envelope.  Domain exceptions propagate to the core exception
handler.
"""

from __future__ import annotations

from uuid import UUID

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.dtos import RegisterUserDTO, UpdateProfileDTO
from modules.accounts.models import Role
from modules.accounts.permissions import role_required
from modules.accounts.repositories import UserDjangoRepository
from modules.accounts.serializers import (
    LoginSerializer,
    RegisterUserSerializer,
    SetActiveSerializer,
    UpdateProfileSerializer,
    UserSerializer,
)
from modules.accounts.services import AccountService
from modules.accounts.tokens import TokenService
from modules.audit.context import AuditContext
from modules.audit.services import AuditLog
from modules.core.responses import envelope


def build_account_service() -> AccountService:
    return AccountService(
        user_repository=UserDjangoRepository(),
        token_service=TokenService(),
        audit_log=AuditLog(),
    )


class _AccountView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_account_service()


def _register_dto(request: Request) -> RegisterUserDTO:
    serializer = RegisterUserSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return RegisterUserDTO(**serializer.validated_data)


class RegisterCustomerView(_AccountView):
    """POST /api/v1/auth/register/customer"""

    authentication_classes: list = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        user = self._service.register_customer(
            _register_dto(request), AuditContext.from_request(request)
        )
        return envelope(
            "Customer registered successfully.",
            {"userId": str(user.id)},
            status=status.HTTP_201_CREATED,
        )


class LoginView(_AccountView):
    """POST /api/v1/auth/login"""

    authentication_classes: list = []
    permission_classes = [AllowAny]
    throttle_scope = "login"

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self._service.login(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        return envelope(
            "Logged in successfully.",
            {
                "jwtToken": result.token,
                "userId": str(result.user_id),
                "role": result.role,
            },
        )


class LogoutView(APIView):
    """POST /api/v1/auth/logout

    Tokens are stateless; the client discards its copy.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        return envelope("Logged out successfully.")


class AdminSetupView(_AccountView):
    """POST /api/v1/setup/register-admin"""

    authentication_classes: list = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        user = self._service.register_initial_admin(
            _register_dto(request), AuditContext.from_request(request)
        )
        return envelope(
            "Initial admin registered successfully.",
            {"userId": str(user.id)},
            status=status.HTTP_201_CREATED,
        )


class CustomerProfileView(_AccountView):
    """GET/PUT/PATCH /api/v1/customer/profile"""

    permission_classes = [IsAuthenticated, role_required(Role.CUSTOMER)]

    def get(self, request: Request) -> Response:
        user = self._service.get_profile(request.user.user_id)
        return envelope(
            "Customer profile fetched successfully.", UserSerializer(user).data
        )

    def put(self, request: Request) -> Response:
        serializer = UpdateProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self._service.update_profile(
            request.user.user_id,
            UpdateProfileDTO(**serializer.validated_data),
            AuditContext.from_request(request),
        )
        return envelope("Profile updated successfully.", UserSerializer(user).data)

    patch = put


class UserListView(_AccountView):
    """GET /api/v1/admin/users"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def get(self, request: Request) -> Response:
        users = self._service.list_users()
        return envelope(
            "Users fetched successfully.", UserSerializer(users, many=True).data
        )


class UserStatusView(_AccountView):
    """PUT /api/v1/admin/users/{user_id}/status"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def put(self, request: Request, user_id: UUID) -> Response:
        serializer = SetActiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        is_active = serializer.validated_data["is_active"]
        user = self._service.set_active(
            request.user.user_id,
            user_id,
            is_active,
            AuditContext.from_request(request),
        )
        state = "activated" if is_active else "deactivated"
        return envelope(
            f"User {state} successfully.", UserSerializer(user).data
        )
