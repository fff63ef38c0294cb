"""Turn raw CSV text into header-keyed rows, rejecting structurally broken input."""
from __future__ import annotations

import csv
import io
import logging
from typing import Iterator, List, Sequence

from ..models import RawRow

LOGGER = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_QUOTE_CHAR = '"'


class CsvImportError(ValueError):
    """Base class for failures that invalidate the whole CSV document."""


class EmptyInputError(CsvImportError):
    """Raised when the CSV text is empty or only whitespace."""

    def __init__(self) -> None:
        super().__init__("CSV content cannot be empty")


class NoDataError(CsvImportError):
    """Raised when no data rows survive parsing."""

    def __init__(self) -> None:
        super().__init__("CSV file appears to be empty or contains no valid data")


class MalformedCsvError(CsvImportError):
    """Raised for field count mismatches and invalid quoting."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"CSV parsing failed: {reason}")
        self.reason = reason


def parse(
    text: str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    quote_char: str = DEFAULT_QUOTE_CHAR,
) -> List[RawRow]:
    """Parse ``text`` into one mapping per non-blank data row.

    The first non-blank line is the header. Header cells are trimmed and
    lowercased, data cells are trimmed. Rows whose cells are all empty are
    skipped. Any structural problem fails the whole document.
    """

    text = (text or "").lstrip("\ufeff")
    if not text.strip():
        raise EmptyInputError()

    # A single cell may hold the whole document.
    csv.field_size_limit(max(csv.field_size_limit(), len(text)))
    records = _iter_records(text, delimiter=delimiter, quote_char=quote_char)

    header: List[str] = []
    for _, cells in records:
        if not _is_blank(cells):
            header = [cell.strip().lower() for cell in cells]
            break

    if not header:
        raise NoDataError()
    if len(header) < 2:
        raise MalformedCsvError(f"Unable to auto-detect delimiting character {delimiter!r}")

    rows: List[RawRow] = []
    for line_number, cells in records:
        if _is_blank(cells):
            LOGGER.debug("Skipping blank CSV row on line %s", line_number)
            continue
        if len(cells) != len(header):
            raise MalformedCsvError(_field_count_reason(len(header), len(cells), line_number))
        rows.append({name: value.strip() for name, value in zip(header, cells)})

    if not rows:
        raise NoDataError()

    LOGGER.debug("Parsed %s data rows with %s columns", len(rows), len(header))
    return rows


def _iter_records(text: str, *, delimiter: str, quote_char: str) -> Iterator[tuple[int, List[str]]]:
    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=delimiter,
        quotechar=quote_char,
        doublequote=True,
        strict=True,
    )
    while True:
        try:
            cells = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise MalformedCsvError(f"{exc} (line {reader.line_num})") from exc
        yield reader.line_num, cells


def _is_blank(cells: Sequence[str]) -> bool:
    return all(not cell.strip() for cell in cells)


def _field_count_reason(expected: int, parsed: int, line_number: int) -> str:
    qualifier = "Too few fields" if parsed < expected else "Too many fields"
    return f"{qualifier}: expected {expected} fields but parsed {parsed} (line {line_number})"


__all__ = [
    "CsvImportError",
    "EmptyInputError",
    "NoDataError",
    "MalformedCsvError",
    "DEFAULT_DELIMITER",
    "DEFAULT_QUOTE_CHAR",
    "parse",
]
