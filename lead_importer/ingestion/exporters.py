"""Export utilities for validated lead data."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import ValidatedLead
from .loaders import UnsupportedFileTypeError

PathLike = Union[str, Path]

REPORT_COLUMNS = [
    "rowIndex",
    "firstName",
    "lastName",
    "email",
    "jobTitle",
    "countryCode",
    "companyName",
    "validationStatus",
    "errors",
    "warnings",
]


def export_validated_leads(
    leads: Sequence[ValidatedLead],
    path: PathLike,
    *,
    extra_columns: Optional[Mapping[int, Mapping[str, object]]] = None,
    sheet_name: str = "Leads",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write a validation report to a CSV, TSV or Excel file.

    ``extra_columns`` maps a lead's ``row_index`` to additional values for that
    row, for example the outcome of an email verification run.
    """

    dataframe = leads_to_dataframe(leads, extra_columns=extra_columns)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(dataframe, output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def leads_to_dataframe(
    leads: Sequence[ValidatedLead],
    *,
    extra_columns: Optional[Mapping[int, Mapping[str, object]]] = None,
) -> pd.DataFrame:
    """Convert validated leads into a :class:`pandas.DataFrame`."""

    extra_columns = extra_columns or {}
    records = [_lead_to_row(lead, extra_columns.get(lead.row_index, {})) for lead in leads]
    columns = list(REPORT_COLUMNS)
    for extra in extra_columns.values():
        columns.extend(key for key in extra if key not in columns)
    return pd.DataFrame(records, columns=columns)


def _lead_to_row(lead: ValidatedLead, extra: Mapping[str, object]) -> MutableMapping[str, object]:
    row: MutableMapping[str, object] = lead.as_row()
    row["errors"] = _join_list(lead.errors)
    row["warnings"] = _join_list(lead.warnings)
    row.update(extra)
    return row


def _join_list(values: Iterable[Optional[str]]) -> str:
    cleaned: List[str] = []
    for value in values:
        if not value:
            continue
        text = str(value).strip()
        if text:
            cleaned.append(text)
    return "; ".join(cleaned)


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise UnsupportedFileTypeError(f"Unsupported export file extension: {suffix}")


__all__ = ["export_validated_leads", "leads_to_dataframe", "REPORT_COLUMNS"]
