"""Invite redemption concurrency test.

N threads race to consume an invite with K remaining uses.  Exactly
``min(N, K)`` succeed, the rest see ``InviteExhausted``, and ``uses``
ends at ``min(N, K)``: never above ``max_uses``.

Uses ``TransactionTestCase`` so each thread can see committed data.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import django
from django.test import TransactionTestCase

from modules.invites.exceptions import InviteExhausted
from modules.invites.models import Invite
from modules.invites.repositories.django_repository import InviteDjangoRepository
from modules.invites.services import InviteService

logger = logging.getLogger(__name__)

NUM_WORKERS = 8


class TestInviteConsumeConcurrency(TransactionTestCase):
    """Prove the conditional update serializes concurrent redemptions."""

    def _consume_in_thread(self, code: str, thread_id: int) -> str:
        django.db.connections.close_all()
        service = InviteService(repository=InviteDjangoRepository())
        try:
            service.consume(code)
            return "success"
        except InviteExhausted:
            logger.warning("Thread %d: InviteExhausted (expected)", thread_id)
            return "exhausted"
        finally:
            django.db.connections.close_all()

    def _race(self, code: str) -> list[str]:
        results = []
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            futures = [
                pool.submit(self._consume_in_thread, code, i) for i in range(NUM_WORKERS)
            ]
            for future in as_completed(futures):
                results.append(future.result())
        return results

    def test_single_use_invite_admits_exactly_one(self):
        Invite.objects.create(code="ONLY-ONE", max_uses=1)

        results = self._race("ONLY-ONE")

        self.assertEqual(results.count("success"), 1)
        self.assertEqual(results.count("exhausted"), NUM_WORKERS - 1)
        self.assertEqual(Invite.objects.get(code="ONLY-ONE").uses, 1)

    def test_capacity_below_contention(self):
        Invite.objects.create(code="THREE-USES", max_uses=3)

        results = self._race("THREE-USES")

        self.assertEqual(results.count("success"), 3)
        self.assertEqual(Invite.objects.get(code="THREE-USES").uses, 3)

    def test_capacity_above_contention(self):
        Invite.objects.create(code="PLENTY-01", max_uses=100)

        results = self._race("PLENTY-01")

        self.assertEqual(results.count("success"), NUM_WORKERS)
        self.assertEqual(Invite.objects.get(code="PLENTY-01").uses, NUM_WORKERS)
