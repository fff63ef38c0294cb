"""Map raw CSV rows onto canonical lead fields and normalise their values."""
from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

from ..countries import DEFAULT_LOOKUP, CountryCodeLookup, coerce_numeric_country_code
from ..models import CanonicalField, NormalizedLead

_NON_LETTERS = re.compile(r"[^a-z]")
_CANONICAL_KEYS: Mapping[str, CanonicalField] = {item.value: item for item in CanonicalField}

# Header line plus 1-based line numbering.
ROW_INDEX_OFFSET = 2


def canonical_field(header: str) -> Optional[CanonicalField]:
    """Resolve a header spelling such as ``First Name`` or ``first_name``."""

    return _CANONICAL_KEYS.get(_NON_LETTERS.sub("", header.lower()))


def normalize(
    row: Mapping[str, Optional[str]],
    position: int,
    *,
    lookup: Optional[CountryCodeLookup] = None,
) -> NormalizedLead:
    """Build a :class:`NormalizedLead` from the ``position``-th emitted data row."""

    lookup = lookup or DEFAULT_LOOKUP
    values: Dict[CanonicalField, str] = {}
    for header, value in row.items():
        field = canonical_field(header or "")
        if field is None:
            continue
        values[field] = (value or "").strip()

    country_code = values.get(CanonicalField.COUNTRY_CODE) or None
    if country_code is not None:
        country_code = coerce_numeric_country_code(country_code, lookup)

    return NormalizedLead(
        first_name=values.get(CanonicalField.FIRST_NAME, ""),
        last_name=values.get(CanonicalField.LAST_NAME, ""),
        email=values.get(CanonicalField.EMAIL, ""),
        row_index=position + ROW_INDEX_OFFSET,
        job_title=values.get(CanonicalField.JOB_TITLE) or None,
        country_code=country_code,
        company_name=values.get(CanonicalField.COMPANY_NAME) or None,
    )


__all__ = ["canonical_field", "normalize", "ROW_INDEX_OFFSET"]
