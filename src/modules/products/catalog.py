"""Read-only snapshot of the sellable catalog."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional
from uuid import UUID

from modules.products.dtos import CatalogEntryDTO


class CatalogSnapshot(Mapping[str, CatalogEntryDTO]):
    """Active products keyed by ``str(product_id)``.

    Built once per checkout; lookups never touch the database.
    """

    def __init__(self, entries: Iterable[CatalogEntryDTO] = ()) -> None:
        self._entries = {str(entry.product_id): entry for entry in entries}

    def __getitem__(self, product_id: str) -> CatalogEntryDTO:
        return self._entries[str(product_id)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, product_id: str | UUID) -> Optional[CatalogEntryDTO]:
        return self._entries.get(str(product_id))
