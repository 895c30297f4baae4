"""Warranty claim model.

Business rules implemented:
- At most one claim per product outside RESOLVED/DENIED, enforced by a
  partial UNIQUE constraint (backed by a row lock on the product in the
  service layer).
- ``last_status_update_at`` moves on every status change.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from modules.claims.constants import TERMINAL_STATES, ClaimStatus
from modules.core.models import BaseModel


class WarrantyClaim(BaseModel):
    registered_product = models.ForeignKey(
        "products.RegisteredProduct",
        on_delete=models.PROTECT,
        related_name="claims",
    )
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="warranty_claims",
    )
    issue_description = models.TextField()
    status = models.CharField(
        max_length=16,
        choices=ClaimStatus.choices,
        default=ClaimStatus.REQUESTED,
    )
    seller_response_notes = models.TextField(null=True, blank=True)
    last_status_update_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "warranty_claims"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["registered_product"],
                condition=~models.Q(status__in=sorted(TERMINAL_STATES)),
                name="uniq_active_claim_per_product",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="claims_status_idx"),
        ]

    @property
    def is_active(self) -> bool:
        return self.status not in TERMINAL_STATES

    def __str__(self) -> str:
        return f"Claim {self.id} ({self.status})"
