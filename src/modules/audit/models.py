"""Append-only audit log.

``LogEntry`` rows are written after the business change they describe
has committed and are never updated.  ``actor`` is nullable: ``None``
means the action was not performed by a signed-in user, and the
reference is cleared rather than blocking if the user row ever goes.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class LogEntry(BaseModel):
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="log_entries",
    )
    action_type = models.CharField(max_length=64)
    entity_type = models.CharField(max_length=32, blank=True, default="")
    entity_id = models.CharField(max_length=64, blank=True, default="")
    details = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)

    class Meta:
        db_table = "log_entries"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="log_entries_created_idx"),
            models.Index(
                fields=["entity_type", "entity_id"],
                name="log_entries_entity_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.action_type} {self.entity_type}:{self.entity_id}"
