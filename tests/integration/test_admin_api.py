"""Integration tests for admin user management and the audit log."""

from __future__ import annotations

import pytest

from modules.audit.models import LogEntry

pytestmark = pytest.mark.integration


class TestUserManagement:
    def test_list_users(self, client_for, admin, customer):
        response = client_for(admin).get("/api/v1/admin/users")
        assert response.status_code == 200
        emails = {row["email"] for row in response.json()["data"]}
        assert emails == {admin.email, customer.email}

    def test_deactivate_user(self, client_for, admin, customer):
        response = client_for(admin).put(
            f"/api/v1/admin/users/{customer.id}/status",
            {"isActive": False},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["message"] == "User deactivated successfully."
        customer.refresh_from_db()
        assert customer.is_active is False
        entry = LogEntry.objects.get(action_type="USER_STATUS_UPDATED")
        assert entry.actor_id == admin.id
        assert entry.entity_id == str(customer.id)

    def test_cannot_deactivate_self(self, client_for, admin):
        response = client_for(admin).put(
            f"/api/v1/admin/users/{admin.id}/status",
            {"isActive": False},
            format="json",
        )
        assert response.status_code == 403
        admin.refresh_from_db()
        assert admin.is_active is True

    def test_unknown_user(self, client_for, admin):
        response = client_for(admin).put(
            "/api/v1/admin/users/00000000-0000-7000-8000-000000000000/status",
            {"isActive": True},
            format="json",
        )
        assert response.status_code == 404

    def test_customer_cannot_list_users(self, client_for, customer):
        assert client_for(customer).get("/api/v1/admin/users").status_code == 403


class TestAuditLog:
    def test_newest_first_and_paginated(self, client_for, admin):
        for n in range(3):
            LogEntry.objects.create(action_type=f"ACTION_{n}", entity_type="TEST")

        response = client_for(admin).get("/api/v1/admin/logs", {"page_size": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 3
        assert [row["actionType"] for row in data["results"]] == ["ACTION_2", "ACTION_1"]
        assert data["next"] is not None
        assert data["previous"] is None

    def test_actions_leave_entries(self, client_for, admin, customer):
        client_for(admin).put(
            f"/api/v1/admin/users/{customer.id}/status",
            {"isActive": True},
            format="json",
        )
        response = client_for(admin).get("/api/v1/admin/logs")
        actions = [row["actionType"] for row in response.json()["data"]["results"]]
        assert actions == ["USER_STATUS_UPDATE_NO_CHANGE"]

    def test_only_admins(self, client_for, seller):
        assert client_for(seller.user).get("/api/v1/admin/logs").status_code == 403
