"""Registered product model.

Business rules implemented:
- A purchase is registered at most once per (customer, seller, order id);
  the UNIQUE constraint closes the race between two concurrent requests.
- Name, price, phone snapshot and purchase date are the seller's values,
  never the customer's.
- Rows are immutable after creation and never deleted.
"""

from __future__ import annotations

from datetime import date

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class RegisteredProduct(BaseModel):
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="registered_products",
    )
    seller = models.ForeignKey(
        "sellers.Seller",
        on_delete=models.PROTECT,
        related_name="registered_products",
    )
    seller_order_id = models.CharField(max_length=100)
    customer_phone_at_sale = models.CharField(max_length=20)
    product_name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    purchase_date = models.DateField()
    warranty_valid_until = models.DateField()

    class Meta:
        db_table = "registered_products"
        ordering = ["-purchase_date", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer", "seller", "seller_order_id"],
                name="uniq_product_customer_seller_order",
            ),
        ]
        indexes = [
            models.Index(fields=["seller"], name="products_seller_idx"),
            models.Index(
                fields=["warranty_valid_until"], name="products_warranty_idx"
            ),
        ]

    def is_under_warranty(self, today: date) -> bool:
        """The expiry day itself is still covered."""
        return self.warranty_valid_until >= today

    def days_remaining(self, today: date) -> int:
        return max(0, (self.warranty_valid_until - today).days)

    def __str__(self) -> str:
        return f"{self.product_name} [{self.seller_order_id}]"
