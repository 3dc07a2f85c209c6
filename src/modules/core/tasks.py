"""Background tasks for the core module."""

import structlog
from celery import shared_task
from django.conf import settings

from modules.core.models import OutboxEvent

logger = structlog.get_logger(__name__)

RELAY_BATCH_SIZE = 100


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = RELAY_BATCH_SIZE) -> dict:
    """Publish pending outbox events in creation order.

    Publishing is a structured log line per event; downstream consumers
    tail the log stream.  A failing event is marked FAILED and the batch
    continues.  Failed events are picked up again on later runs until
    they have used ``OUTBOX_MAX_RETRIES`` attempts.
    """
    published = 0
    failed = 0
    batch = OutboxEvent.objects.relayable(settings.OUTBOX_MAX_RETRIES)[:batch_size]
    for event in batch:
        try:
            logger.info(
                "outbox.event_published",
                event_type=event.event_type,
                topic=event.topic,
                aggregate_id=event.aggregate_id,
                payload=event.payload,
                attempt=event.retry_count + 1,
            )
            event.mark_as_published()
            published += 1
        except Exception as exc:
            logger.exception("outbox.event_failed", event_id=str(event.id))
            event.mark_as_failed(str(exc))
            failed += 1
    return {"published": published, "failed": failed}
