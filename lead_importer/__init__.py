"""Top-level package for the lead CSV import and validation toolkit."""

from . import models  # noqa: F401
from .countries import CountryCodeLookup, PycountryLookup  # noqa: F401
from .ingestion import (  # noqa: F401
    CsvImportError,
    EmptyInputError,
    MalformedCsvError,
    NoDataError,
    parse_csv,
)
from .models import (  # noqa: F401
    CanonicalField,
    NormalizedLead,
    ValidatedLead,
    ValidationStatus,
)

__all__ = [
    "CanonicalField",
    "CountryCodeLookup",
    "CsvImportError",
    "EmptyInputError",
    "MalformedCsvError",
    "NoDataError",
    "NormalizedLead",
    "PycountryLookup",
    "ValidatedLead",
    "ValidationStatus",
    "parse_csv",
    "ingestion",
    "orchestrator",
    "engines",
]
