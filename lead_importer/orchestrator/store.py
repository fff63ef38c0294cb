"""Lead store interface used by the importer and an in-memory implementation."""
from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

NamePair = Tuple[str, str]


@dataclass(slots=True)
class NewLead:
    """Field values for a lead that has not been persisted yet."""

    first_name: str
    last_name: str
    email: str
    job_title: Optional[str] = None
    country_code: Optional[str] = None
    company_name: Optional[str] = None


@dataclass(slots=True)
class StoredLead:
    """A persisted lead together with the results of later batch operations."""

    id: int
    first_name: str
    last_name: str
    email: str
    job_title: Optional[str] = None
    country_code: Optional[str] = None
    company_name: Optional[str] = None
    email_verified: Optional[bool] = None
    message: Optional[str] = None

    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class LeadStore(Protocol):
    """Persistence operations the batch services depend on."""

    def find_existing(self, pairs: Sequence[NamePair]) -> List[StoredLead]:  # pragma: no cover - runtime protocol
        """Return stored leads matching any ``(first_name, last_name)`` pair."""

    def create(self, lead: NewLead) -> StoredLead:  # pragma: no cover - runtime protocol
        """Persist ``lead`` and return the stored record."""

    def get_many(self, ids: Iterable[int]) -> List[StoredLead]:  # pragma: no cover - runtime protocol
        """Return the stored leads whose ids are in ``ids``."""

    def update(self, lead_id: int, **changes: object) -> StoredLead:  # pragma: no cover - runtime protocol
        """Apply ``changes`` to a stored lead and return the updated record."""


class InMemoryLeadStore:
    """Thread-safe dictionary backed :class:`LeadStore`."""

    def __init__(self, leads: Iterable[NewLead] = ()) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._leads: Dict[int, StoredLead] = {}
        for lead in leads:
            self.create(lead)

    def __len__(self) -> int:
        return len(self._leads)

    def all(self) -> List[StoredLead]:
        with self._lock:
            return list(self._leads.values())

    def find_existing(self, pairs: Sequence[NamePair]) -> List[StoredLead]:
        wanted = set(pairs)
        with self._lock:
            return [lead for lead in self._leads.values() if (lead.first_name, lead.last_name) in wanted]

    def create(self, lead: NewLead) -> StoredLead:
        with self._lock:
            stored = StoredLead(
                id=next(self._ids),
                first_name=lead.first_name,
                last_name=lead.last_name,
                email=lead.email,
                job_title=lead.job_title,
                country_code=lead.country_code,
                company_name=lead.company_name,
            )
            self._leads[stored.id] = stored
            return stored

    def get_many(self, ids: Iterable[int]) -> List[StoredLead]:
        with self._lock:
            return [self._leads[lead_id] for lead_id in dict.fromkeys(ids) if lead_id in self._leads]

    def update(self, lead_id: int, **changes: object) -> StoredLead:
        with self._lock:
            try:
                current = self._leads[lead_id]
            except KeyError:
                raise LookupError(f"Lead {lead_id} does not exist") from None
            updated = replace(current, **changes)
            self._leads[lead_id] = updated
            return updated


__all__ = ["NamePair", "NewLead", "StoredLead", "LeadStore", "InMemoryLeadStore"]
