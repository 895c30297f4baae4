"""Registered product DRF serializers (camelCase on the wire).

Warranty eligibility and ``daysRemaining`` depend on the current date,
which the view passes in the serializer context as ``today``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import RegisteredProduct


class RegisterProductSerializer(serializers.Serializer):
    sellerId = serializers.UUIDField(source="seller_id")
    orderId = serializers.CharField(source="order_id", max_length=100)
    purchaseDate = serializers.DateField(source="purchase_date")


class _ProductSerializer(serializers.ModelSerializer):
    registeredProductId = serializers.UUIDField(source="id")
    productName = serializers.CharField(source="product_name")
    sellerOrderId = serializers.CharField(source="seller_order_id")
    dateOfPurchase = serializers.DateField(source="purchase_date")
    warrantyValidUntil = serializers.DateField(source="warranty_valid_until")
    isWarrantyEligible = serializers.SerializerMethodField()

    def get_isWarrantyEligible(self, obj: RegisteredProduct) -> bool:
        return obj.is_under_warranty(self.context["today"])


class CustomerProductSerializer(_ProductSerializer):
    sellerId = serializers.UUIDField(source="seller_id")
    shopName = serializers.CharField(source="seller.shop_name")
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, allow_null=True, coerce_to_string=True
    )
    daysRemaining = serializers.SerializerMethodField()

    class Meta:
        model = RegisteredProduct
        fields = [
            "registeredProductId",
            "productName",
            "sellerId",
            "shopName",
            "sellerOrderId",
            "price",
            "dateOfPurchase",
            "warrantyValidUntil",
            "isWarrantyEligible",
            "daysRemaining",
        ]
        read_only_fields = fields

    def get_daysRemaining(self, obj: RegisteredProduct) -> int:
        return obj.days_remaining(self.context["today"])


class SellerProductSerializer(_ProductSerializer):
    customerName = serializers.CharField(source="customer.name")
    customerPhoneNumber = serializers.CharField(source="customer_phone_at_sale")

    class Meta:
        model = RegisteredProduct
        fields = [
            "registeredProductId",
            "customerName",
            "customerPhoneNumber",
            "productName",
            "sellerOrderId",
            "dateOfPurchase",
            "warrantyValidUntil",
            "isWarrantyEligible",
        ]
        read_only_fields = fields
