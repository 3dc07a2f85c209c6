"""Customer service layer (Use Cases).

- ``RegistrationService``: invite-gated account creation.
- ``CustomerService``: profile look-ups for authenticated users.

Registration consumes the invite and creates the account in a single
transaction: if creating the user or profile fails, the invite use is
given back by the rollback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerNotFound,
    InactiveCustomer,
)
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import RegisterCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.invites.services import InviteService

logger = structlog.get_logger(__name__)


class RegistrationService:
    """Signup use-case: redeem an invite, then create the account."""

    def __init__(
        self,
        customer_repository: ICustomerRepository,
        invite_service: InviteService,
    ) -> None:
        self._customer_repo = customer_repository
        self._invites = invite_service

    @transaction.atomic
    def register(self, dto: RegisterCustomerDTO) -> Customer:
        """Create an auth user and customer profile behind an invite.

        Raises:
            CustomerAlreadyExists: the email is already registered.  Checked
                before the invite is touched, so no use is spent.
            InviteError: the invite is not redeemable.
        """
        log = logger.bind(email_domain=dto.email.rsplit("@", 1)[-1])
        User = get_user_model()

        if (
            self._customer_repo.get_by_email(dto.email)
            or User.objects.filter(username=dto.email).exists()
        ):
            log.warning("customer.duplicate_email")
            raise CustomerAlreadyExists("Email already registered.")

        invite = self._invites.consume(dto.invite_code)

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=dto.email,
                    email=dto.email,
                    password=dto.password,
                    first_name=dto.name[:150],
                )
                customer = self._customer_repo.save(
                    Customer(
                        user=user,
                        name=dto.name,
                        email=dto.email,
                        phone=dto.phone,
                        invite_code=invite.code,
                    )
                )
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email.
            log.warning("customer.duplicate_email", error=str(exc))
            raise CustomerAlreadyExists("Email already registered.") from exc

        log.info("customer.registered", customer_id=str(customer.id))
        return customer


class CustomerService:
    """Application service for customer profile look-ups."""

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    def get_for_user(self, user: Any) -> Customer:
        """Return the live profile for an authenticated user.

        Raises:
            CustomerNotFound: the user has no profile (e.g. a staff account).
        """
        customer = self._repo.get_by_user_id(user.pk)
        if customer is None:
            raise CustomerNotFound(f"User {user.pk} has no customer profile.")
        return customer

    def get_active_for_user(self, user: Any) -> Customer:
        """Like ``get_for_user`` but refuses deactivated profiles.

        Raises:
            CustomerNotFound: the user has no profile.
            InactiveCustomer: staff deactivated the profile.
        """
        customer = self.get_for_user(user)
        if not customer.is_active:
            logger.warning("customer.inactive", customer_id=str(customer.id))
            raise InactiveCustomer(f"Customer {customer.id} is inactive.")
        return customer
