"""Registered product DTOs for the Service Layer.

- ``RegisterProductDTO``: what the customer claims about a purchase.
- ``ValidatedPurchase``: what the seller's system confirms (authoritative).
- ``RegistrationOutcome``: what the workflow hands back to the API layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class RegisterProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    customer_id: UUID
    seller_id: UUID
    order_id: str = Field(min_length=1, max_length=100)
    purchase_date: date


class ValidatedPurchase(BaseModel):
    """The ``data`` object of a successful seller validation response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    authoritative_purchase_date: date = Field(alias="authoritativePurchaseDate")
    warranty_period_months: PositiveInt = Field(alias="warrantyPeriodMonths")
    customer_phone_number: str = Field(alias="customerPhoneNumber", min_length=1)
    product_name: str = Field(alias="productName", min_length=1)
    price: Optional[Decimal] = None

    @field_validator("authoritative_purchase_date", mode="before")
    @classmethod
    def date_part_only(cls, v):
        # Sellers may send a full ISO timestamp; only the calendar day counts.
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


@dataclass(frozen=True)
class RegistrationOutcome:
    registered_product_id: UUID
    product_name: str
    warranty_valid_until: date
