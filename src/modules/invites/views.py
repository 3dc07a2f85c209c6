"""Invite API views.

Anonymous visitors may only check a code; issuing, listing and
switching invites off is staff tooling.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.invites.dtos import CreateInviteDTO
from modules.invites.exceptions import InviteAlreadyExists, InviteError, InviteNotFound
from modules.invites.filters import InviteFilter
from modules.invites.models import Invite
from modules.invites.repositories.django_repository import InviteDjangoRepository
from modules.invites.serializers import (
    CreateInviteSerializer,
    InviteSerializer,
    InviteValidateSerializer,
)
from modules.invites.services import InviteService


def invite_error_response(exc: InviteError) -> Response:
    return error_response(
        exc.message, exc.code, status.HTTP_400_BAD_REQUEST, attr="invite_code"
    )


class InviteViewSet(ListModelMixin, GenericViewSet):
    """Invite ledger endpoints.

    ``validate`` is public and throttled; everything else needs staff.
    """

    serializer_class = InviteSerializer
    queryset = Invite.objects.all()
    filterset_class = InviteFilter
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    ordering_fields = ["created_at", "expires_at", "uses"]
    ordering = ["-created_at"]
    permission_classes = [IsAdminUser]
    lookup_field = "code"
    lookup_value_regex = r"[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = InviteService(repository=InviteDjangoRepository())

    def get_permissions(self):
        if self.action == "validate":
            return [AllowAny()]
        return super().get_permissions()

    def get_throttles(self):
        if self.action == "validate":
            self.throttle_scope = "invite_validation"
        return super().get_throttles()

    def create(self, request: Request) -> Response:
        """POST /api/v1/invites/"""
        serializer = CreateInviteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            data = dict(serializer.validated_data)
            data["issued_to_email"] = data.get("issued_to_email") or None
            dto = CreateInviteDTO(**data)
        except (PydanticValidationError, ValueError) as exc:
            return error_response(
                str(exc), "invalid", status.HTTP_400_BAD_REQUEST
            )

        try:
            invite = self._service.create_invite(dto)
        except InviteAlreadyExists as exc:
            return error_response(
                str(exc), "invite_already_exists", status.HTTP_409_CONFLICT, attr="code"
            )
        return Response(InviteSerializer(invite).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def validate(self, request: Request) -> Response:
        """POST /api/v1/invites/validate/"""
        serializer = InviteValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = self._service.validate(serializer.validated_data["code"])
        except InviteError as exc:
            return invite_error_response(exc)
        return Response(result.model_dump())

    @action(detail=True, methods=["post"])
    def activate(self, request: Request, code: str | None = None) -> Response:
        """POST /api/v1/invites/{code}/activate/"""
        return self._set_active(code, True)

    @action(detail=True, methods=["post"])
    def deactivate(self, request: Request, code: str | None = None) -> Response:
        """POST /api/v1/invites/{code}/deactivate/"""
        return self._set_active(code, False)

    def _set_active(self, code: str | None, active: bool) -> Response:
        try:
            invite = self._service.set_active(code or "", active)
        except InviteNotFound as exc:
            return error_response(exc.message, exc.code, status.HTTP_404_NOT_FOUND)
        return Response(InviteSerializer(invite).data)
