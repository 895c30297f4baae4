"""Seller profile model.

Business rules implemented:
- Each SELLER user owns exactly one profile (one-to-one).
- A profile only exists alongside its user: both rows are written in the
  same transaction by ``SellerService.provision_seller``.
- Only ACTIVE sellers with an API base URL and key can validate purchases.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel
from modules.sellers.constants import ContractStatus


class Seller(BaseModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="seller_profile",
    )
    shop_name = models.CharField(max_length=255)
    business_name = models.CharField(max_length=255, blank=True, default="")
    business_email = models.EmailField(max_length=254)
    business_phone_number = models.CharField(max_length=20)
    address = models.TextField(blank=True, default="")
    contract_status = models.CharField(
        max_length=16,
        choices=ContractStatus.choices,
        default=ContractStatus.PENDING,
    )
    api_base_url = models.URLField(max_length=500, blank=True, default="")
    api_key = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "sellers"
        ordering = ["shop_name"]
        indexes = [
            models.Index(fields=["contract_status"], name="sellers_status_idx"),
        ]

    @property
    def is_integration_ready(self) -> bool:
        """ACTIVE and holding both an endpoint and a credential."""
        return (
            self.contract_status == ContractStatus.ACTIVE
            and bool(self.api_base_url)
            and bool(self.api_key)
        )

    def __str__(self) -> str:
        return f"{self.shop_name} ({self.contract_status})"
