"""Audit URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.audit.views import LogEntryListView

urlpatterns = [
    path("admin/logs", LogEntryListView.as_view(), name="admin-logs"),
]
