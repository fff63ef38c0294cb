"""Field level validation and tri-state classification of normalised leads."""
from __future__ import annotations

import re
from typing import List, Optional

from ..countries import DEFAULT_LOOKUP, CountryCodeLookup
from ..models import NormalizedLead, ValidatedLead

# The message strings are identifiers for the import UI; do not reword them.
ERROR_FIRST_NAME_REQUIRED = "First name is required"
ERROR_LAST_NAME_REQUIRED = "Last name is required"
ERROR_EMAIL_REQUIRED = "Email is required"
ERROR_INVALID_EMAIL_FORMAT = "Invalid email format"
WARNING_INVALID_COUNTRY_CODE = "Invalid country code (will be left empty)"

_EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email: str) -> bool:
    """Syntactic screen only; deliverability is checked by a verification engine."""
    return bool(_EMAIL_SHAPE.fullmatch(email or ""))


def validate(lead: NormalizedLead, *, lookup: Optional[CountryCodeLookup] = None) -> ValidatedLead:
    lookup = lookup or DEFAULT_LOOKUP
    errors: List[str] = []
    warnings: List[str] = []

    if not lead.first_name.strip():
        errors.append(ERROR_FIRST_NAME_REQUIRED)
    if not lead.last_name.strip():
        errors.append(ERROR_LAST_NAME_REQUIRED)
    if not lead.email.strip():
        errors.append(ERROR_EMAIL_REQUIRED)
    elif not is_valid_email(lead.email):
        errors.append(ERROR_INVALID_EMAIL_FORMAT)
    if lead.country_code and not lookup.is_valid_code(lead.country_code):
        warnings.append(WARNING_INVALID_COUNTRY_CODE)

    return ValidatedLead(**lead.field_values(), errors=errors, warnings=warnings)


__all__ = [
    "ERROR_FIRST_NAME_REQUIRED",
    "ERROR_LAST_NAME_REQUIRED",
    "ERROR_EMAIL_REQUIRED",
    "ERROR_INVALID_EMAIL_FORMAT",
    "WARNING_INVALID_COUNTRY_CODE",
    "is_valid_email",
    "validate",
]
