"""Seller DRF serializers for API input/output (camelCase on the wire)."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.serializers import RegisterUserSerializer
from modules.sellers.constants import ContractStatus
from modules.sellers.models import Seller


class RegisterSellerSerializer(RegisterUserSerializer):
    """Owner account fields plus the shop's business details."""

    shopName = serializers.CharField(source="shop_name", max_length=255)
    businessName = serializers.CharField(
        source="business_name", required=False, allow_blank=True, default=""
    )
    businessEmail = serializers.EmailField(source="business_email")
    businessPhoneNumber = serializers.CharField(
        source="business_phone_number", max_length=20
    )


class AdminCreateSellerSerializer(RegisterSellerSerializer):
    contractStatus = serializers.ChoiceField(
        source="contract_status", choices=ContractStatus.choices
    )
    apiBaseUrl = serializers.URLField(
        source="api_base_url", required=False, allow_blank=True, default=""
    )
    apiKey = serializers.CharField(
        source="api_key", required=False, allow_blank=True, default=""
    )


class UpdateSellerProfileSerializer(serializers.Serializer):
    shopName = serializers.CharField(source="shop_name", required=False)
    businessName = serializers.CharField(
        source="business_name", required=False, allow_blank=True, allow_null=True
    )
    businessEmail = serializers.EmailField(source="business_email", required=False)
    businessPhoneNumber = serializers.CharField(
        source="business_phone_number", required=False
    )
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AdminUpdateSellerSerializer(UpdateSellerProfileSerializer):
    contractStatus = serializers.ChoiceField(
        source="contract_status", choices=ContractStatus.choices, required=False
    )
    apiBaseUrl = serializers.URLField(
        source="api_base_url", required=False, allow_blank=True, allow_null=True
    )
    apiKey = serializers.CharField(
        source="api_key", required=False, allow_blank=True, allow_null=True
    )


class ContractStatusSerializer(serializers.Serializer):
    contractStatus = serializers.CharField(source="contract_status")


class SellerSummarySerializer(serializers.ModelSerializer):
    """What customers see: just enough to pick a shop."""

    sellerId = serializers.UUIDField(source="id")
    shopName = serializers.CharField(source="shop_name")

    class Meta:
        model = Seller
        fields = ["sellerId", "shopName"]
        read_only_fields = fields


class SellerSerializer(serializers.ModelSerializer):
    """Seller's own view of their profile; the API key is never echoed."""

    sellerId = serializers.UUIDField(source="id")
    userId = serializers.UUIDField(source="user_id")
    shopName = serializers.CharField(source="shop_name")
    businessName = serializers.CharField(source="business_name")
    businessEmail = serializers.EmailField(source="business_email")
    businessPhoneNumber = serializers.CharField(source="business_phone_number")
    contractStatus = serializers.CharField(source="contract_status")
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = Seller
        fields = [
            "sellerId",
            "userId",
            "shopName",
            "businessName",
            "businessEmail",
            "businessPhoneNumber",
            "address",
            "contractStatus",
            "createdAt",
        ]
        read_only_fields = fields


class AdminSellerSerializer(SellerSerializer):
    apiBaseUrl = serializers.CharField(source="api_base_url")
    hasApiKey = serializers.SerializerMethodField()

    class Meta(SellerSerializer.Meta):
        fields = SellerSerializer.Meta.fields + ["apiBaseUrl", "hasApiKey"]
        read_only_fields = fields

    def get_hasApiKey(self, obj: Seller) -> bool:
        return bool(obj.api_key)
