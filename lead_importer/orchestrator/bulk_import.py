"""Bulk import of validated leads into a lead store."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..countries import DEFAULT_LOOKUP, CountryCodeLookup, try_convert_country_code_to_alpha2
from ..models import NormalizedLead
from .store import LeadStore, NamePair, NewLead, StoredLead

LOGGER = logging.getLogger(__name__)

LeadLike = Union[NormalizedLead, Mapping[str, Any]]

_MAPPING_KEYS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "job_title": "jobTitle",
    "country_code": "countryCode",
    "company_name": "companyName",
}


class BulkImportError(ValueError):
    """Raised when a batch contains no lead that can be imported."""


@dataclass
class ImportFailure:
    lead: LeadLike
    error: str


@dataclass
class ImportedLead:
    source: LeadLike
    stored: StoredLead


@dataclass
class BulkImportResult:
    """Summary of a bulk import run."""

    imported_count: int = 0
    duplicates_skipped: int = 0
    invalid_leads: int = 0
    errors: List[ImportFailure] = field(default_factory=list)
    created: List[ImportedLead] = field(default_factory=list)


def lead_key(first_name: str, last_name: str) -> str:
    """Case-insensitive identity used to detect leads that already exist."""
    return f"{first_name.strip().lower()}_{last_name.strip().lower()}"


def _get(lead: LeadLike, attribute: str) -> Any:
    if isinstance(lead, Mapping):
        return lead.get(_MAPPING_KEYS[attribute], lead.get(attribute))
    return getattr(lead, attribute, None)


def _text(lead: LeadLike, attribute: str) -> Optional[str]:
    value = _get(lead, attribute)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _has_required_fields(lead: LeadLike) -> bool:
    return all(_text(lead, attribute) for attribute in ("first_name", "last_name", "email"))


class BulkImporter:
    """Creates leads in a store, skipping ones whose name already exists there.

    Leads are accepted either as pipeline records or as camelCase mappings as
    posted by the import UI. Duplicate names within one batch are not collapsed.
    """

    def __init__(self, store: LeadStore, *, lookup: Optional[CountryCodeLookup] = None) -> None:
        self._store = store
        self._lookup = lookup or DEFAULT_LOOKUP

    def import_leads(self, leads: Sequence[LeadLike]) -> BulkImportResult:
        if not leads:
            raise ValueError("leads must be a non-empty array")

        valid_leads = [lead for lead in leads if _has_required_fields(lead)]
        if not valid_leads:
            raise BulkImportError("No valid leads found. firstName, lastName, and email are required.")

        pairs: List[NamePair] = [(_text(lead, "first_name"), _text(lead, "last_name")) for lead in valid_leads]
        existing = self._store.find_existing(pairs)
        existing_keys = {lead_key(lead.first_name, lead.last_name or "") for lead in existing}

        unique_leads = [
            lead
            for lead in valid_leads
            if lead_key(_text(lead, "first_name"), _text(lead, "last_name")) not in existing_keys
        ]

        result = BulkImportResult(
            duplicates_skipped=len(valid_leads) - len(unique_leads),
            invalid_leads=len(leads) - len(valid_leads),
        )

        for lead in unique_leads:
            try:
                stored = self._store.create(self._to_new_lead(lead))
            except Exception as exc:
                LOGGER.exception("Failed to import lead %s %s", _text(lead, "first_name"), _text(lead, "last_name"))
                result.errors.append(ImportFailure(lead=lead, error=str(exc) or exc.__class__.__name__))
                continue
            result.created.append(ImportedLead(source=lead, stored=stored))
            result.imported_count += 1

        LOGGER.info(
            "Imported %s leads (%s duplicates skipped, %s invalid, %s failed)",
            result.imported_count,
            result.duplicates_skipped,
            result.invalid_leads,
            len(result.errors),
        )
        return result

    def _to_new_lead(self, lead: LeadLike) -> NewLead:
        country_code = _text(lead, "country_code")
        return NewLead(
            first_name=_text(lead, "first_name") or "",
            last_name=_text(lead, "last_name") or "",
            email=_text(lead, "email") or "",
            job_title=_text(lead, "job_title"),
            country_code=try_convert_country_code_to_alpha2(country_code, self._lookup) if country_code else None,
            company_name=_text(lead, "company_name"),
        )


__all__ = [
    "BulkImporter",
    "BulkImportResult",
    "BulkImportError",
    "ImportFailure",
    "ImportedLead",
    "lead_key",
]
