"""Customer DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).  It handles
request parsing and password strength; business logic lives in the
Service Layer, which receives Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from modules.customers.models import Customer


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    invite_code = serializers.CharField(max_length=64)
    password = serializers.CharField(write_only=True, min_length=8)

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value


class CustomerSerializer(serializers.ModelSerializer):
    """Read-only profile representation."""

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
