"""Batch email verification for stored leads."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence, Union

from .store import LeadStore, StoredLead

LOGGER = logging.getLogger(__name__)


class VerificationEngine(Protocol):
    """External service confirming that an email address can receive mail."""

    def verify(self, email: str) -> bool:  # pragma: no cover - runtime protocol
        """Return ``True`` when ``email`` is deliverable."""


@dataclass
class VerificationOutcome:
    lead_id: int
    email_verified: bool


@dataclass
class VerificationFailure:
    lead_id: int
    lead_name: str
    error: str


@dataclass
class VerificationBatchResult:
    verified_count: int = 0
    results: List[VerificationOutcome] = field(default_factory=list)
    errors: List[VerificationFailure] = field(default_factory=list)


class EmailVerificationService:
    """Runs the verification engine once per lead and records the outcome.

    A failing lead is reported in ``errors`` and does not stop the batch.
    """

    def __init__(
        self,
        engine: VerificationEngine,
        store: LeadStore,
        *,
        concurrent: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        self._engine = engine
        self._store = store
        self._concurrent = concurrent
        self._max_workers = max_workers

    def verify_leads(self, lead_ids: Sequence[int]) -> VerificationBatchResult:
        if not lead_ids:
            raise ValueError("leadIds must be a non-empty array")

        leads = self._store.get_many(int(lead_id) for lead_id in lead_ids)
        if not leads:
            raise LookupError("No leads found with the provided IDs")

        batch = VerificationBatchResult()
        for outcome in self._run(leads):
            if isinstance(outcome, VerificationFailure):
                batch.errors.append(outcome)
            else:
                batch.results.append(outcome)
                batch.verified_count += 1
        return batch

    def _run(self, leads: List[StoredLead]) -> Iterable[Union[VerificationOutcome, VerificationFailure]]:
        if not self._concurrent or len(leads) <= 1:
            return [self._verify_lead(lead) for lead in leads]

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            # map() yields in submission order
            return list(executor.map(self._verify_lead, leads))

    def _verify_lead(self, lead: StoredLead) -> Union[VerificationOutcome, VerificationFailure]:
        try:
            LOGGER.debug("Verifying email for lead %s", lead.id)
            verified = bool(self._engine.verify(lead.email))
            self._store.update(lead.id, email_verified=verified)
        except Exception as exc:
            LOGGER.exception("Email verification failed for lead %s", lead.id)
            return VerificationFailure(
                lead_id=lead.id,
                lead_name=lead.display_name(),
                error=str(exc) or exc.__class__.__name__,
            )
        return VerificationOutcome(lead_id=lead.id, email_verified=verified)


__all__ = [
    "VerificationEngine",
    "VerificationOutcome",
    "VerificationFailure",
    "VerificationBatchResult",
    "EmailVerificationService",
]
