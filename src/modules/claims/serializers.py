"""Warranty claim DRF serializers (camelCase on the wire)."""

from __future__ import annotations

from rest_framework import serializers

from modules.claims.models import WarrantyClaim


class CreateClaimSerializer(serializers.Serializer):
    registeredProductId = serializers.UUIDField(source="registered_product_id")
    issueDescription = serializers.CharField(source="issue_description")


class TransitionClaimSerializer(serializers.Serializer):
    claimStatus = serializers.CharField(source="status")
    sellerResponseNotes = serializers.CharField(
        source="seller_response_notes",
        required=False,
        allow_blank=True,
        allow_null=True,
    )


class ClaimSerializer(serializers.ModelSerializer):
    claimId = serializers.UUIDField(source="id")
    registeredProductId = serializers.UUIDField(source="registered_product_id")
    productName = serializers.CharField(source="registered_product.product_name")
    sellerOrderId = serializers.CharField(source="registered_product.seller_order_id")
    shopName = serializers.CharField(source="registered_product.seller.shop_name")
    customerName = serializers.CharField(source="customer.name")
    issueDescription = serializers.CharField(source="issue_description")
    claimStatus = serializers.CharField(source="status")
    sellerResponseNotes = serializers.CharField(
        source="seller_response_notes", allow_null=True
    )
    createdAt = serializers.DateTimeField(source="created_at")
    lastStatusUpdateAt = serializers.DateTimeField(source="last_status_update_at")

    class Meta:
        model = WarrantyClaim
        fields = [
            "claimId",
            "registeredProductId",
            "productName",
            "sellerOrderId",
            "shopName",
            "customerName",
            "issueDescription",
            "claimStatus",
            "sellerResponseNotes",
            "createdAt",
            "lastStatusUpdateAt",
        ]
        read_only_fields = fields
