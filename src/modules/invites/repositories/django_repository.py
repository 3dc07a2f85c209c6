"""Django ORM implementation of the Invite repository.

``try_consume`` is a single conditional ``UPDATE``: the redeemability
predicate and the increment execute as one statement, so two concurrent
redemptions can never both take the last use.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.db.models import F, Q

from modules.core.outbox import flush_domain_events
from modules.invites.models import Invite
from modules.invites.repositories.interfaces import IInviteRepository

logger = structlog.get_logger(__name__)


class InviteDjangoRepository(IInviteRepository):
    """Concrete Invite repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Invite]:
        return self.get_by_code(id)

    def get_by_code(self, code: str) -> Optional[Invite]:
        return Invite.objects.filter(code=code).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Invite]:
        """List invites with optional Django ORM look-ups.

        Examples of valid filters::

            {"active": True}
            {"issued_to_email__iexact": "friend@example.com"}
        """
        queryset = Invite.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Invite) -> Invite:
        """Persist (create or update) an invite and flush its events."""
        is_new = entity._state.adding
        entity.save()
        flush_domain_events(entity)
        logger.info("invite.saved", max_uses=entity.max_uses, is_new=is_new)
        return entity

    def try_consume(self, code: str, now: datetime) -> bool:
        updated = (
            Invite.objects.filter(
                Q(expires_at__isnull=True) | Q(expires_at__gt=now),
                code=code,
                active=True,
                uses__lt=F("max_uses"),
            ).update(uses=F("uses") + 1, updated_at=now)
        )
        return updated == 1

    def flush_events(self, entity: Invite) -> None:
        flush_domain_events(entity)

    @transaction.atomic
    def set_active(self, code: str, active: bool) -> Optional[Invite]:
        invite = Invite.objects.select_for_update().filter(code=code).first()
        if invite is None:
            return None
        invite.active = active
        invite.save(update_fields=["active", "updated_at"])
        return invite
