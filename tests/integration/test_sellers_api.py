"""Integration tests for seller provisioning and seller management.

Covers:
- self-service registration lands PENDING with no integration fields
- admin creation with contract status and integration settings
- provisioning atomicity: a failed profile insert leaves no user row
- seller profile, deactivation request, admin status / detail updates
- customer-facing seller lists
"""

from __future__ import annotations

from unittest import mock

import pytest
from django.db import DatabaseError, IntegrityError

from modules.accounts.models import Role, User
from modules.audit.models import LogEntry
from modules.sellers.constants import ContractStatus
from modules.sellers.models import Seller

pytestmark = pytest.mark.integration

REGISTER_URL = "/api/v1/auth/register/seller"
ADMIN_SELLERS_URL = "/api/v1/admin/sellers"


def _payload(**overrides):
    payload = {
        "name": "Owner",
        "email": "owner@shop.com",
        "password": "secret-1",
        "phoneNumber": "+15550002",
        "shopName": "Gadget Shop",
        "businessEmail": "sales@shop.com",
        "businessPhoneNumber": "+15550003",
    }
    payload.update(overrides)
    return payload


class TestSelfRegistration:
    def test_creates_user_and_pending_profile(self, api_client):
        response = api_client.post(
            REGISTER_URL,
            _payload(contractStatus="ACTIVE", apiKey="sneaky"),
            format="json",
        )
        assert response.status_code == 201
        seller = Seller.objects.select_related("user").get(
            id=response.json()["data"]["sellerId"]
        )
        assert seller.user.role == Role.SELLER
        assert seller.contract_status == ContractStatus.PENDING
        assert seller.api_key == ""
        assert LogEntry.objects.filter(action_type="SELLER_REGISTERED").exists()

    def test_duplicate_email_writes_nothing(self, api_client, make_user):
        make_user(email="owner@shop.com")
        response = api_client.post(REGISTER_URL, _payload(), format="json")
        assert response.status_code == 409
        assert Seller.objects.count() == 0

    def test_profile_failure_rolls_back_user(self, api_client):
        with mock.patch.object(
            Seller.objects, "create", side_effect=DatabaseError("disk full")
        ):
            response = api_client.post(REGISTER_URL, _payload(), format="json")

        assert response.status_code == 500
        assert response.json()["status"] == "error"
        assert "disk full" not in response.json()["message"]
        assert not User.objects.filter(email="owner@shop.com").exists()
        assert Seller.objects.count() == 0
        assert not LogEntry.objects.filter(action_type="SELLER_REGISTERED").exists()

    def test_not_null_failure_is_500_not_conflict(self, api_client):
        with mock.patch.object(
            Seller.objects,
            "create",
            side_effect=IntegrityError("NOT NULL constraint failed: sellers.shop_name"),
        ):
            response = api_client.post(REGISTER_URL, _payload(), format="json")

        assert response.status_code == 500
        assert response.json()["status"] == "error"
        assert "already" not in response.json()["message"]
        assert not User.objects.filter(email="owner@shop.com").exists()
        assert Seller.objects.count() == 0

    def test_new_seller_can_log_in(self, api_client):
        api_client.post(REGISTER_URL, _payload(), format="json")
        response = api_client.post(
            "/api/v1/auth/login",
            {"email": "owner@shop.com", "password": "secret-1"},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "SELLER"


class TestAdminSellerManagement:
    def test_admin_creates_active_seller(self, client_for, admin):
        response = client_for(admin).post(
            ADMIN_SELLERS_URL,
            _payload(
                contractStatus="ACTIVE",
                apiBaseUrl="https://shop.example.com",
                apiKey="k-123",
            ),
            format="json",
        )
        assert response.status_code == 201
        seller = Seller.objects.get(id=response.json()["data"]["sellerId"])
        assert seller.is_integration_ready
        entry = LogEntry.objects.get(action_type="SELLER_CREATED_BY_ADMIN")
        assert entry.actor_id == admin.id

    def test_admin_list_hides_api_key(self, client_for, admin, seller):
        response = client_for(admin).get(ADMIN_SELLERS_URL)
        assert response.status_code == 200
        row = response.json()["data"][0]
        assert row["hasApiKey"] is True
        assert "apiKey" not in row

    def test_set_contract_status(self, client_for, admin, make_seller):
        pending = make_seller(contract_status=ContractStatus.PENDING)
        response = client_for(admin).put(
            f"{ADMIN_SELLERS_URL}/{pending.id}/status",
            {"contractStatus": "ACTIVE"},
            format="json",
        )
        assert response.status_code == 200
        pending.refresh_from_db()
        assert pending.contract_status == ContractStatus.ACTIVE

    def test_set_unknown_contract_status(self, client_for, admin, seller):
        response = client_for(admin).put(
            f"{ADMIN_SELLERS_URL}/{seller.id}/status",
            {"contractStatus": "PAUSED"},
            format="json",
        )
        assert response.status_code == 400

    def test_partial_admin_update(self, client_for, admin, seller):
        response = client_for(admin).patch(
            f"{ADMIN_SELLERS_URL}/{seller.id}",
            {"apiBaseUrl": "https://new.example.com"},
            format="json",
        )
        assert response.status_code == 200
        seller.refresh_from_db()
        assert seller.api_base_url == "https://new.example.com"
        assert seller.api_key == "shop-key"

    def test_seller_cannot_use_admin_endpoints(self, client_for, seller):
        response = client_for(seller.user).get(ADMIN_SELLERS_URL)
        assert response.status_code == 403


class TestSellerSelfService:
    def test_profile(self, client_for, seller):
        response = client_for(seller.user).get("/api/v1/seller/profile")
        assert response.status_code == 200
        assert response.json()["data"]["sellerId"] == str(seller.id)
        assert "apiKey" not in response.json()["data"]

    def test_update_profile(self, client_for, seller):
        response = client_for(seller.user).patch(
            "/api/v1/seller/profile", {"shopName": "Renamed"}, format="json"
        )
        assert response.status_code == 200
        seller.refresh_from_db()
        assert seller.shop_name == "Renamed"

    def test_deactivation_request(self, client_for, seller):
        client = client_for(seller.user)
        first = client.post("/api/v1/seller/deactivate-request")
        assert first.status_code == 200
        seller.refresh_from_db()
        assert seller.contract_status == ContractStatus.DEACTIVATED

        second = client.post("/api/v1/seller/deactivate-request")
        assert second.status_code == 409


class TestCustomerSellerLists:
    def test_only_active_sellers_listed(self, client_for, customer, make_seller):
        active = make_seller()
        make_seller(contract_status=ContractStatus.PENDING)
        response = client_for(customer).get("/api/v1/customer/sellers")
        assert response.status_code == 200
        assert [row["sellerId"] for row in response.json()["data"]] == [str(active.id)]

    def test_my_sellers(self, client_for, customer, make_seller, make_product):
        mine = make_seller()
        make_seller()
        make_product(customer, mine)
        make_product(customer, mine)
        response = client_for(customer).get("/api/v1/customer/my-sellers")
        assert [row["sellerId"] for row in response.json()["data"]] == [str(mine.id)]
