"""Audit log sink.

Best-effort by contract: each entry is written in its own savepoint and
a storage failure is logged, never propagated, so it can't undo or fail
the operation being audited.  Callers invoke ``record`` after their own
atomic block has exited.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import structlog
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from modules.audit.context import SYSTEM, AuditContext
from modules.audit.models import LogEntry

logger = structlog.get_logger(__name__)


class AuditLog:
    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: Any,
        details: Optional[Dict[str, Any]] = None,
        context: AuditContext = SYSTEM,
    ) -> Optional[LogEntry]:
        try:
            with transaction.atomic():
                entry = LogEntry.objects.create(
                    actor_id=context.actor_id,
                    action_type=action,
                    entity_type=entity_type,
                    entity_id=str(entity_id) if entity_id is not None else "",
                    details=_json_safe(details or {}),
                    ip_address=context.origin,
                )
        except DatabaseError as exc:
            logger.error(
                "audit.write_failed",
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id),
                error=str(exc),
            )
            return None
        return entry

    def entries(self) -> QuerySet:
        """Newest first, with the actor joined in."""
        return LogEntry.objects.select_related("actor").order_by("-created_at", "-id")


def _json_safe(details: Dict[str, Any]) -> Dict[str, Any]:
    """Round-trip through Django's encoder so UUIDs, dates and Decimals fit JSONField."""
    return json.loads(json.dumps(details, cls=DjangoJSONEncoder))
