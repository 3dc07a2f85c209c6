"""Persistence contract shared by every module's repository.

Services receive a repository through their constructor and only ever
talk to these abstractions, so unit tests can hand them a fake.  There
is no ``delete`` here: invites and orders are ledgers, and the catalog
and customer repositories add their own soft delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

EntityT = TypeVar("EntityT")


class IRepository(ABC, Generic[EntityT]):
    @abstractmethod
    def get_by_id(self, id: str) -> Optional[EntityT]:
        """Return the entity with primary key ``id``, or ``None``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[EntityT]:
        """Return entities matching ``filters`` (exact-match field lookups)."""

    @abstractmethod
    def save(self, entity: EntityT) -> EntityT:
        """Insert or update ``entity`` and return it."""
