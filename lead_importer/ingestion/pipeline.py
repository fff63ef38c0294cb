"""Single pass CSV import: tokenize, normalise and validate every data row."""
from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional

from ..config import ImportSettings
from ..countries import DEFAULT_LOOKUP, CountryCodeLookup
from ..models import ValidatedLead
from .mapper import normalize
from .tokenizer import DEFAULT_DELIMITER, parse
from .validator import validate

LOGGER = logging.getLogger(__name__)


def parse_csv(
    text: str,
    *,
    settings: Optional[ImportSettings] = None,
    lookup: Optional[CountryCodeLookup] = None,
) -> List[ValidatedLead]:
    """Return one classified lead per non-blank data row, in file order.

    Structural problems raise :class:`~lead_importer.ingestion.tokenizer.CsvImportError`
    before any row is produced. Row level problems never raise; they are
    reported through each lead's ``errors`` and ``warnings``.
    """

    settings = settings or ImportSettings()
    delimiter = settings.delimiter or DEFAULT_DELIMITER
    lookup = lookup or DEFAULT_LOOKUP

    raw_rows = parse(text, delimiter=delimiter, quote_char=settings.quote_char)
    leads = [
        validate(normalize(row, position, lookup=lookup), lookup=lookup)
        for position, row in enumerate(raw_rows)
    ]

    if LOGGER.isEnabledFor(logging.DEBUG):
        counts = Counter(lead.validation_status.value for lead in leads)
        LOGGER.debug("Validated %s leads: %s", len(leads), dict(counts))
    return leads


__all__ = ["parse_csv"]
