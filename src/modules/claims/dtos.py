"""Warranty claim DTOs for the Service Layer."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.accounts.dtos import PartialUpdateDTO


class CreateClaimDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    customer_id: UUID
    registered_product_id: UUID
    issue_description: str

    @field_validator("issue_description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Issue description must not be blank.")
        return v


class TransitionClaimDTO(PartialUpdateDTO):
    """Target status plus optional notes.

    ``status`` is kept as a plain string so an unknown value reaches the
    service and is reported with the list of valid statuses.
    """

    status: str
    seller_response_notes: Optional[str] = None

    @property
    def notes_supplied(self) -> bool:
        return "seller_response_notes" in self.model_fields_set
