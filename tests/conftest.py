from datetime import date

import pytest

from rest_framework.test import APIClient

from modules.accounts.models import Role, User
from modules.accounts.tokens import TokenService
from modules.claims.constants import ClaimStatus
from modules.claims.models import WarrantyClaim
from modules.products.models import RegisteredProduct
from modules.sellers.constants import ContractStatus
from modules.sellers.models import Seller

PASSWORD = "secret-pass-1"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_user():
    counter = {"n": 0}

    def _make(role=Role.CUSTOMER, email=None, **extra):
        counter["n"] += 1
        fields = {
            "name": f"User {counter['n']}",
            "phone_number": f"+1555000{counter['n']:04d}",
            "role": role,
        }
        fields.update(extra)
        return User.objects.create_user(
            email=email or f"user{counter['n']}@example.com",
            password=PASSWORD,
            **fields,
        )

    return _make


@pytest.fixture()
def make_seller(make_user):
    def _make(
        contract_status=ContractStatus.ACTIVE,
        api_base_url="https://shop.example.com",
        api_key="shop-key",
        **extra,
    ):
        user = make_user(role=Role.SELLER)
        fields = {
            "shop_name": f"Shop of {user.name}",
            "business_email": f"biz-{user.email}",
            "business_phone_number": "+15559990000",
        }
        fields.update(extra)
        return Seller.objects.create(
            user=user,
            contract_status=contract_status,
            api_base_url=api_base_url,
            api_key=api_key,
            **fields,
        )

    return _make


@pytest.fixture()
def make_product():
    counter = {"n": 0}

    def _make(customer, seller, warranty_valid_until=date(2099, 1, 1), **extra):
        counter["n"] += 1
        fields = {
            "seller_order_id": f"ORD-{counter['n']}",
            "customer_phone_at_sale": customer.phone_number,
            "product_name": "Blender X",
            "purchase_date": date(2024, 7, 20),
            "warranty_valid_until": warranty_valid_until,
        }
        fields.update(extra)
        return RegisteredProduct.objects.create(
            customer=customer, seller=seller, **fields
        )

    return _make


@pytest.fixture()
def make_claim():
    def _make(product, status=ClaimStatus.REQUESTED, **extra):
        return WarrantyClaim.objects.create(
            registered_product=product,
            customer_id=product.customer_id,
            issue_description=extra.pop("issue_description", "Motor stopped."),
            status=status,
            **extra,
        )

    return _make


# ---------------------------------------------------------------------------
# Authenticated clients
# ---------------------------------------------------------------------------


def bearer(user) -> str:
    return f"Bearer {TokenService().issue(user.id, user.role)}"


@pytest.fixture()
def client_for():
    """Return an APIClient sending a valid bearer token for *user*."""

    def _client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=bearer(user))
        return client

    return _client


@pytest.fixture()
def customer(make_user):
    return make_user(role=Role.CUSTOMER)


@pytest.fixture()
def admin(make_user):
    return make_user(role=Role.ADMIN)


@pytest.fixture()
def seller(make_seller):
    return make_seller()
