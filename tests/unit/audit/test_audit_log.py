"""Unit tests for the best-effort audit sink and the request context."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError, transaction
from rest_framework.test import APIRequestFactory

from modules.accounts.identity import CustomerIdentity
from modules.audit.context import AuditContext
from modules.audit.models import LogEntry
from modules.audit.services import AuditLog

pytestmark = pytest.mark.unit


class TestRecord:
    def test_writes_entry_with_json_safe_details(self, make_user):
        actor = make_user()
        entity_id = uuid.uuid4()

        entry = AuditLog().record(
            "PRODUCT_REGISTERED",
            "REGISTERED_PRODUCT",
            entity_id,
            {"until": date(2025, 7, 20), "price": Decimal("9.90"), "id": entity_id},
            AuditContext(actor_id=actor.id, origin="10.0.0.7"),
        )

        entry.refresh_from_db()
        assert entry.actor_id == actor.id
        assert entry.entity_id == str(entity_id)
        assert entry.ip_address == "10.0.0.7"
        assert entry.details == {
            "until": "2025-07-20",
            "price": "9.90",
            "id": str(entity_id),
        }

    def test_system_context_has_no_actor(self):
        entry = AuditLog().record("SOMETHING", "USER", None)
        assert entry.actor_id is None
        assert entry.entity_id == ""

    def test_storage_failure_is_swallowed(self):
        with mock.patch.object(
            LogEntry.objects, "create", side_effect=DatabaseError("no table")
        ):
            assert AuditLog().record("CLAIM_CREATED", "WARRANTY_CLAIM", 1) is None

    def test_failure_does_not_break_outer_transaction(self, make_user):
        with transaction.atomic():
            user = make_user()
            with mock.patch.object(
                LogEntry.objects, "create", side_effect=DatabaseError("boom")
            ):
                AuditLog().record("USER_PROFILE_UPDATED", "USER", user.id)
            user.name = "Still writable"
            user.save()
        user.refresh_from_db()
        assert user.name == "Still writable"

    def test_entries_newest_first(self):
        log = AuditLog()
        first = log.record("A", "X", 1)
        second = log.record("B", "X", 2)
        assert list(log.entries()) == [second, first]


class TestAuditContext:
    def test_anonymous_request(self):
        request = APIRequestFactory().post("/", REMOTE_ADDR="192.0.2.1")
        request.user = AnonymousUser()
        context = AuditContext.from_request(request)
        assert context == AuditContext(actor_id=None, origin="192.0.2.1")

    def test_authenticated_request_behind_proxy(self):
        user_id = uuid.uuid4()
        request = APIRequestFactory().post(
            "/", HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1"
        )
        request.user = CustomerIdentity(user_id=user_id)
        context = AuditContext.from_request(request)
        assert context.actor_id == user_id
        assert context.origin == "203.0.113.5"
