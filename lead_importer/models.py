"""Data models shared by the CSV import pipeline and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


# --- Raw Input Models ---

RawRow = Dict[str, str]


class CanonicalField(str, Enum):
    """Lead attributes recognised in CSV headers, keyed by their normalised spelling."""

    FIRST_NAME = "firstname"
    LAST_NAME = "lastname"
    EMAIL = "email"
    JOB_TITLE = "jobtitle"
    COUNTRY_CODE = "countrycode"
    COMPANY_NAME = "companyname"


# --- Pipeline Models ---

class ValidationStatus(str, Enum):
    VALID = "valid"
    WARNING = "warning"
    INVALID = "invalid"


def derive_status(errors: Sequence[str], warnings: Sequence[str]) -> ValidationStatus:
    """Classify a row from its accumulated messages; errors dominate warnings."""

    if errors:
        return ValidationStatus.INVALID
    if warnings:
        return ValidationStatus.WARNING
    return ValidationStatus.VALID


@dataclass(slots=True)
class NormalizedLead:
    """A single CSV data row mapped onto the canonical lead fields."""

    first_name: str
    last_name: str
    email: str
    row_index: int
    job_title: Optional[str] = None
    country_code: Optional[str] = None
    company_name: Optional[str] = None

    def field_values(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(NormalizedLead)}


@dataclass(slots=True)
class ValidatedLead(NormalizedLead):
    """Normalized lead annotated with the messages produced by validation."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def validation_status(self) -> ValidationStatus:
        return derive_status(self.errors, self.warnings)

    @property
    def is_importable(self) -> bool:
        return self.validation_status is not ValidationStatus.INVALID

    def as_row(self) -> Dict[str, Any]:
        """Return the record in the shape consumed by the import UI."""
        row: Dict[str, Any] = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "jobTitle": self.job_title,
            "countryCode": self.country_code,
            "companyName": self.company_name,
            "validationStatus": self.validation_status.value,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "rowIndex": self.row_index,
        }
        return row


__all__ = [
    "RawRow",
    "CanonicalField",
    "ValidationStatus",
    "derive_status",
    "NormalizedLead",
    "ValidatedLead",
]
