"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.

Customers only ever see their own orders; anything else answers 404
so order ids cannot be probed.  Status changes other than
cancellation are staff-only.
"""

from __future__ import annotations

from uuid import UUID

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.customers.exceptions import CustomerNotFound, InactiveCustomer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.notifications.dispatcher import CeleryNotificationDispatcher
from modules.orders.dtos import CartLineDTO, CheckoutDTO
from modules.orders.exceptions import (
    CartError,
    ConflictRetry,
    InvalidTransition,
    OrderNotFound,
    PriceMismatchInternal,
    ProductNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CancelOrderSerializer,
    CheckoutSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateStatusSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


def _not_found() -> Response:
    return error_response("Order not found.", "not_found", status.HTTP_404_NOT_FOUND)


def _invalid_transition(exc: InvalidTransition) -> Response:
    return error_response(
        str(exc),
        "invalid_transition",
        status.HTTP_409_CONFLICT,
        attr="status",
        current_status=exc.current_status,
        attempted_status=exc.target_status,
    )


def _conflict() -> Response:
    return error_response(
        "The order was changed by someone else. Reload it and try again.",
        "conflict",
        status.HTTP_409_CONFLICT,
        retryable=True,
    )


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all writes go through the
    service layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total_cents", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            customer_service=CustomerService(repository=CustomerDjangoRepository()),
            notifier=CeleryNotificationDispatcher(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "checkout"
        elif self.action in {"list", "retrieve", "lookup"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        queryset = Order.objects.select_related("customer")
        if not self.request.user.is_staff:
            queryset = queryset.filter(customer__user_id=self.request.user.pk)
        return queryset

    def _can_access(self, request: Request, order: Order) -> bool:
        return request.user.is_staff or order.customer.user_id == request.user.pk

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Supports idempotency via the ``Idempotency-Key`` header.
        Returns 200 if the key was already used, 201 for new orders.
        """
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            dto = CheckoutDTO(
                lines=[CartLineDTO(**line) for line in data["lines"]],
                payment_method=data["payment_method"],
                notes=data.get("notes", ""),
                idempotency_key=request.headers.get("Idempotency-Key"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return error_response(str(exc), "invalid", status.HTTP_400_BAD_REQUEST)

        try:
            order, created = self._service.checkout(request.user, dto)
        except CustomerNotFound:
            return error_response(
                "Only customer accounts can place orders.",
                "customer_profile_required",
                status.HTTP_403_FORBIDDEN,
            )
        except InactiveCustomer:
            return error_response(
                "Your account is inactive.",
                "customer_inactive",
                status.HTTP_403_FORBIDDEN,
            )
        except ProductNotFound as exc:
            return error_response(
                str(exc), exc.code, status.HTTP_404_NOT_FOUND, attr=f"lines.{exc.line}"
            )
        except CartError as exc:
            attr = f"lines.{exc.line}" if exc.line is not None else "lines"
            return error_response(
                str(exc), exc.code, status.HTTP_400_BAD_REQUEST, attr=attr
            )
        except PriceMismatchInternal:
            return error_response(
                "We could not place your order. Please try again later.",
                "internal_error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            OrderSerializer(order).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Staff see every order; customers see their own.  Filtering and
        ordering come from ``filter_backends``; results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk or "")
        except OrderNotFound:
            return _not_found()
        if not self._can_access(request, order):
            return _not_found()
        return Response(OrderSerializer(order).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"lookup/(?P<confirmation_code>[A-Za-z0-9]+)",
    )
    def lookup(self, request: Request, confirmation_code: str | None = None) -> Response:
        """GET /api/v1/orders/lookup/{confirmation_code}/"""
        try:
            order = self._service.get_by_confirmation_code(confirmation_code or "")
        except OrderNotFound:
            return _not_found()
        if not self._can_access(request, order):
            return _not_found()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/ (staff only)"""
        if not request.user.is_staff:
            return error_response(
                "Only staff can change order status.",
                "permission_denied",
                status.HTTP_403_FORBIDDEN,
            )

        serializer = UpdateStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.update_status(
                order_id=UUID(pk or ""),
                new_status=serializer.validated_data["status"].strip().lower(),
                notes=serializer.validated_data["notes"],
                user=request.user,
            )
        except (OrderNotFound, ValueError):
            return _not_found()
        except InvalidTransition as exc:
            return _invalid_transition(exc)
        except ConflictRetry:
            return _conflict()

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/ (staff or the ordering customer)"""
        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.get_order(pk or "")
        except OrderNotFound:
            return _not_found()
        if not self._can_access(request, order):
            return _not_found()

        try:
            order = self._service.cancel_order(
                order_id=order.id,
                notes=serializer.validated_data["notes"],
                user=request.user,
            )
        except OrderNotFound:
            return _not_found()
        except InvalidTransition as exc:
            return _invalid_transition(exc)
        except ConflictRetry:
            return _conflict()

        return Response(OrderSerializer(order).data)
