"""Templated outreach message generation for stored leads."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence

from .store import LeadStore, StoredLead

LOGGER = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z]+)\s*\}\}")

_TEMPLATE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "jobTitle": "job_title",
    "countryCode": "country_code",
    "companyName": "company_name",
}


class TemplateError(ValueError):
    """Raised when a template references a field leads do not have."""


def generate_message_from_template(template: str, lead: StoredLead) -> str:
    """Replace ``{{ firstName }}`` style placeholders with the lead's values."""

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        try:
            attribute = _TEMPLATE_FIELDS[name]
        except KeyError:
            raise TemplateError(f"Unknown template field '{name}'") from None
        return getattr(lead, attribute) or ""

    return _PLACEHOLDER.sub(substitute, template)


@dataclass
class MessageFailure:
    lead_id: int
    lead_name: str
    error: str


@dataclass
class MessageBatchResult:
    generated_count: int = 0
    errors: List[MessageFailure] = field(default_factory=list)


class MessageGenerationService:
    def __init__(self, store: LeadStore) -> None:
        self._store = store

    def generate(self, lead_ids: Sequence[int], template: str) -> MessageBatchResult:
        if not lead_ids:
            raise ValueError("leadIds must be a non-empty array")
        if not template or not isinstance(template, str):
            raise ValueError("template must be a non-empty string")

        leads = self._store.get_many(int(lead_id) for lead_id in lead_ids)
        if not leads:
            raise LookupError("No leads found with the provided IDs")

        batch = MessageBatchResult()
        for lead in leads:
            try:
                message = generate_message_from_template(template, lead)
                self._store.update(lead.id, message=message)
            except Exception as exc:
                LOGGER.warning("Message generation failed for lead %s: %s", lead.id, exc)
                batch.errors.append(
                    MessageFailure(lead_id=lead.id, lead_name=lead.display_name(), error=str(exc))
                )
                continue
            batch.generated_count += 1
        return batch


__all__ = [
    "TemplateError",
    "generate_message_from_template",
    "MessageFailure",
    "MessageBatchResult",
    "MessageGenerationService",
]
