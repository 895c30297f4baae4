"""Who did it and from where: passed from views into services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class AuditContext:
    actor_id: Optional[UUID] = None
    origin: Optional[str] = None

    @classmethod
    def from_request(cls, request) -> AuditContext:
        from modules.core.responses import client_ip

        user = request.user
        actor_id = getattr(user, "user_id", None) if user.is_authenticated else None
        return cls(actor_id=actor_id, origin=client_ip(request))


SYSTEM = AuditContext()
