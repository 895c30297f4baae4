"""Seller DTOs for the Service Layer.

``ProvisionSellerDTO`` carries everything needed to create the owning
user and the seller profile in one step.  Update DTOs are partial: only
fields present in ``model_fields_set`` are written.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from modules.accounts.dtos import PartialUpdateDTO, RegisterUserDTO
from modules.sellers.constants import ContractStatus


class ProvisionSellerDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    owner: RegisterUserDTO
    shop_name: str
    business_name: str = ""
    business_email: EmailStr
    business_phone_number: str
    address: str = ""
    contract_status: ContractStatus = ContractStatus.PENDING
    api_base_url: str = ""
    api_key: str = ""

    @field_validator("shop_name", "business_phone_number")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Field must not be blank.")
        return v


class UpdateSellerProfileDTO(PartialUpdateDTO):
    """Fields a seller may change on their own profile."""

    shop_name: Optional[str] = None
    business_name: Optional[str] = None
    business_email: Optional[EmailStr] = None
    business_phone_number: Optional[str] = None
    address: Optional[str] = None

    @field_validator("shop_name", "business_email", "business_phone_number")
    @classmethod
    def required_not_null(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Field must not be blank.")
        return v


class AdminUpdateSellerDTO(UpdateSellerProfileDTO):
    """Admin edit: profile fields plus contract and integration settings."""

    contract_status: Optional[ContractStatus] = None
    api_base_url: Optional[str] = None
    api_key: Optional[str] = None

    @field_validator("contract_status")
    @classmethod
    def status_not_null(cls, v):
        if v is None:
            raise ValueError("Contract status must not be null.")
        return v
