"""Customer profile bound to a Django auth user.

Business rules implemented:
- A profile only exists for accounts created through an invite redemption
  (``invite_code`` records which one).
- Email must be unique in the system.
- Inactive customers cannot check out (enforced at service layer).
- Profiles are soft-deleted so historical orders keep their customer.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import SoftDeleteModel


class Customer(SoftDeleteModel):
    """Customer aggregate root.

    ``email`` is stored lower-cased and doubles as the auth username.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="customer",
    )
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    invite_code = models.CharField(max_length=20)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
            models.Index(fields=["invite_code"], name="customers_invite_idx"),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
