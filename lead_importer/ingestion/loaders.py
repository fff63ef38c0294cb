"""Utilities for loading lead CSV files from disk."""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import List, Optional, Union

from ..config import ImportSettings
from ..countries import CountryCodeLookup
from ..models import ValidatedLead
from .pipeline import parse_csv

PathLike = Union[str, Path]

_TEXT_SUFFIXES = {".csv", ".tsv", ".txt"}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def read_csv_text(path: PathLike, *, encoding: str = "utf-8-sig") -> str:
    path_obj = Path(path)
    if path_obj.suffix.lower() not in _TEXT_SUFFIXES:
        raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")
    return path_obj.read_text(encoding=encoding)


def load_leads(
    path: PathLike,
    *,
    settings: Optional[ImportSettings] = None,
    lookup: Optional[CountryCodeLookup] = None,
) -> List[ValidatedLead]:
    """Read a delimited text file and run it through the import pipeline.

    Parameters
    ----------
    path:
        Path to the ``.csv``, ``.tsv`` or ``.txt`` file to be loaded.
    settings:
        Parsing options. Unless they name a delimiter, ``.tsv`` files use a tab
        and everything else a comma.
    lookup:
        Country code lookup passed through to the pipeline.
    """

    path_obj = Path(path)
    settings = settings or ImportSettings()
    if settings.delimiter is None and path_obj.suffix.lower() == ".tsv":
        settings = dataclasses.replace(settings, delimiter="\t")

    text = read_csv_text(path_obj, encoding=settings.encoding)
    return parse_csv(text, settings=settings, lookup=lookup)


__all__ = ["load_leads", "read_csv_text", "UnsupportedFileTypeError"]
