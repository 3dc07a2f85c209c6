"""Customer API views.

Signup is the only anonymous write in the system.  Domain exceptions
are caught and translated into HTTP status codes; the view never
swallows generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from modules.core.exceptions import error_response
from modules.customers.dtos import RegisterCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer, SignupSerializer
from modules.customers.services import CustomerService, RegistrationService
from modules.invites.exceptions import InviteError
from modules.invites.repositories.django_repository import InviteDjangoRepository
from modules.invites.services import InviteService
from modules.invites.views import invite_error_response


class SignupView(APIView):
    """POST /api/v1/auth/signup/"""

    permission_classes = [AllowAny]
    throttle_scope = "signup"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = RegistrationService(
            customer_repository=CustomerDjangoRepository(),
            invite_service=InviteService(repository=InviteDjangoRepository()),
        )

    def post(self, request: Request) -> Response:
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = RegisterCustomerDTO(**serializer.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return error_response(str(exc), "invalid", status.HTTP_400_BAD_REQUEST)

        try:
            customer = self._service.register(dto)
        except InviteError as exc:
            return invite_error_response(exc)
        except CustomerAlreadyExists as exc:
            return error_response(
                str(exc), "customer_already_exists", status.HTTP_409_CONFLICT,
                attr="email",
            )

        refresh = RefreshToken.for_user(customer.user)
        return Response(
            {
                "customer": CustomerSerializer(customer).data,
                "refresh": str(refresh),
                "access": str(refresh.access_token),
            },
            status=status.HTTP_201_CREATED,
        )


class ProfileView(APIView):
    """GET /api/v1/me/profile/"""

    permission_classes = [IsAuthenticated]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def get(self, request: Request) -> Response:
        try:
            customer = self._service.get_for_user(request.user)
        except CustomerNotFound:
            return error_response(
                "Customer profile not found.", "not_found", status.HTTP_404_NOT_FOUND
            )
        return Response(CustomerSerializer(customer).data)
