"""CSV ingestion pipeline: tokenizer, field mapper, validator, and file I/O."""

from .exporters import export_validated_leads, leads_to_dataframe
from .loaders import UnsupportedFileTypeError, load_leads, read_csv_text
from .mapper import canonical_field, normalize
from .pipeline import parse_csv
from .tokenizer import CsvImportError, EmptyInputError, MalformedCsvError, NoDataError, parse
from .validator import (
    ERROR_EMAIL_REQUIRED,
    ERROR_FIRST_NAME_REQUIRED,
    ERROR_INVALID_EMAIL_FORMAT,
    ERROR_LAST_NAME_REQUIRED,
    WARNING_INVALID_COUNTRY_CODE,
    is_valid_email,
    validate,
)

__all__ = [
    "CsvImportError",
    "EmptyInputError",
    "MalformedCsvError",
    "NoDataError",
    "UnsupportedFileTypeError",
    "ERROR_EMAIL_REQUIRED",
    "ERROR_FIRST_NAME_REQUIRED",
    "ERROR_INVALID_EMAIL_FORMAT",
    "ERROR_LAST_NAME_REQUIRED",
    "WARNING_INVALID_COUNTRY_CODE",
    "canonical_field",
    "export_validated_leads",
    "is_valid_email",
    "leads_to_dataframe",
    "load_leads",
    "normalize",
    "parse",
    "parse_csv",
    "read_csv_text",
    "validate",
]
