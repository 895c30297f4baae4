"""Audit log output serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.audit.models import LogEntry


class LogEntrySerializer(serializers.ModelSerializer):
    logId = serializers.UUIDField(source="id", read_only=True)
    timestamp = serializers.DateTimeField(source="created_at", read_only=True)
    actionType = serializers.CharField(source="action_type", read_only=True)
    entityType = serializers.CharField(source="entity_type", read_only=True)
    entityId = serializers.CharField(source="entity_id", read_only=True)
    ipAddress = serializers.CharField(source="ip_address", read_only=True)
    userName = serializers.CharField(source="actor.name", read_only=True, default=None)

    class Meta:
        model = LogEntry
        fields = [
            "logId",
            "timestamp",
            "actionType",
            "entityType",
            "entityId",
            "details",
            "ipAddress",
            "userName",
        ]
        read_only_fields = fields
