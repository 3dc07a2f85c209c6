"""Helpers that flush aggregate domain events into the outbox table."""

from __future__ import annotations

from typing import List

import structlog

from modules.core.models import OutboxEvent
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


def flush_domain_events(entity: DomainEventMixin) -> List[OutboxEvent]:
    """Persist the entity's pending events and clear them.

    Must run inside the transaction that persisted the entity itself.
    """
    rows = [
        OutboxEvent.objects.create(
            event_type=event.event_name,
            aggregate_id=str(event.aggregate_id),
            payload=event.to_payload(),
            topic=event.topic,
        )
        for event in entity.domain_events
    ]
    entity.clear_domain_events()
    if rows:
        logger.info(
            "outbox.events_recorded",
            event_types=[row.event_type for row in rows],
            aggregate_id=rows[0].aggregate_id,
        )
    return rows
