"""Shared abstract models and the transactional outbox.

- ``BaseModel``: time-ordered UUIDv7 primary key plus timestamps.
- ``SoftDeleteModel``: hides rows through ``deleted_at`` instead of
  deleting them.  Products and customer profiles use it because orders
  keep pointing at them.
- ``OutboxEvent``: domain events written in the same transaction as the
  invite or order change they describe, relayed later by Celery.

``created_at`` is assigned when the instance is built, not on insert, so
an order can derive its confirmation code before the first ``save()``.
The default manager of soft-deletable models is unfiltered; call
``.alive()`` to skip deleted rows.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        # auto_now only fires for fields being written.
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Soft delete
# ---------------------------------------------------------------------------


class SoftDeleteQuerySet(models.QuerySet):
    def alive(self) -> SoftDeleteQuerySet:
        return self.filter(deleted_at__isnull=True)

    def dead(self) -> SoftDeleteQuerySet:
        return self.filter(deleted_at__isnull=False)

    def delete(self) -> tuple[int, dict[str, int]]:
        """Stamp ``deleted_at`` on every live row of the queryset."""
        now = timezone.now()
        hidden = self.alive().update(deleted_at=now, updated_at=now)
        return hidden, {self.model._meta.label: hidden}

    delete.queryset_only = True


SoftDeleteManager = models.Manager.from_queryset(SoftDeleteQuerySet)


class SoftDeleteModel(BaseModel):
    deleted_at = models.DateTimeField(null=True, blank=True, default=None, db_index=True)

    objects = SoftDeleteManager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def delete(self, using=None, keep_parents=False) -> tuple[int, dict[str, int]]:
        if self.is_deleted:
            return 0, {}
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at"])
        return 1, {self._meta.label: 1}

    def restore(self) -> None:
        if self.is_deleted:
            self.deleted_at = None
            self.save(update_fields=["deleted_at"])


# ---------------------------------------------------------------------------
# Transactional outbox
# ---------------------------------------------------------------------------


class EventStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PUBLISHED = "PUBLISHED", "Published"
    FAILED = "FAILED", "Failed"


class OutboxEventQuerySet(models.QuerySet):
    def relayable(self, max_retries: int) -> OutboxEventQuerySet:
        """Events the relay should (re)try, oldest first.

        ``PENDING`` rows always qualify; ``FAILED`` rows only while they
        have attempts left.
        """
        return self.filter(
            models.Q(status=EventStatus.PENDING)
            | models.Q(status=EventStatus.FAILED, retry_count__lt=max_retries)
        ).order_by("created_at", "id")


class OutboxEvent(BaseModel):
    """One domain event waiting to be relayed.

    ``topic`` names the aggregate family (``invites`` or ``orders``) and
    ``aggregate_id`` the invite code or order id.  The relay task marks
    each row published, or failed with the error and a bumped
    ``retry_count``.
    """

    event_type = models.CharField(max_length=100)
    payload = models.JSONField()
    aggregate_id = models.CharField(max_length=255)
    topic = models.CharField(max_length=100)
    status = models.CharField(
        max_length=20, choices=EventStatus.choices, default=EventStatus.PENDING
    )
    processed_at = models.DateTimeField(null=True, blank=True, default=None)
    error_message = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    retry_count = models.PositiveIntegerField(default=0)

    objects = OutboxEventQuerySet.as_manager()

    class Meta:
        db_table = "outbox_events"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["event_type"], name="outbox_event_type_idx"),
            models.Index(fields=["aggregate_id"], name="outbox_aggregate_id_idx"),
            models.Index(fields=["status", "created_at"], name="outbox_status_created_idx"),
        ]

    def mark_as_published(self) -> None:
        self.status = EventStatus.PUBLISHED
        self.processed_at = timezone.now()
        self.error_message = None
        self.save(update_fields=["status", "processed_at", "error_message"])

    def mark_as_failed(self, error: str) -> None:
        self.status = EventStatus.FAILED
        self.error_message = error
        self.retry_count = models.F("retry_count") + 1
        self.save(update_fields=["status", "error_message", "retry_count"])
        self.refresh_from_db(fields=["retry_count"])

    def __str__(self) -> str:
        return f"{self.topic}:{self.event_type} [{self.status}] ({self.aggregate_id})"
