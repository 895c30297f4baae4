"""Account DRF serializers for API input/output.

Input serializers only parse the HTTP body (camelCase on the wire);
business rules live in the Service Layer, which receives Pydantic DTOs
from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import User


class RegisterUserSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    phoneNumber = serializers.CharField(source="phone_number", max_length=20)
    address = serializers.CharField(required=False, allow_blank=True, default="")


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )


class UpdateProfileSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, max_length=255)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SetActiveSerializer(serializers.Serializer):
    isActive = serializers.BooleanField(source="is_active")


class UserSerializer(serializers.ModelSerializer):
    """Public representation of a user; never exposes the password hash."""

    phoneNumber = serializers.CharField(source="phone_number")
    isActive = serializers.BooleanField(source="is_active")
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "phoneNumber",
            "address",
            "role",
            "isActive",
            "createdAt",
        ]
        read_only_fields = fields
