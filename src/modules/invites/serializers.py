"""Invite DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.invites.constants import INVITE_CODE_MAX_LENGTH
from modules.invites.models import Invite


class InviteValidateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64, trim_whitespace=True)


class InviteSerializer(serializers.ModelSerializer):
    """Staff view of an invite, including usage counters."""

    remaining_uses = serializers.IntegerField(read_only=True)

    class Meta:
        model = Invite
        fields = [
            "code",
            "issued_to_email",
            "max_uses",
            "uses",
            "remaining_uses",
            "expires_at",
            "active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateInviteSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=INVITE_CODE_MAX_LENGTH)
    max_uses = serializers.IntegerField(required=False, default=1)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)
    issued_to_email = serializers.EmailField(required=False, allow_blank=True)
