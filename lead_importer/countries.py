"""ISO 3166-1 country code lookups used during normalisation and import."""
from __future__ import annotations

import re
from typing import Optional, Protocol

import pycountry

_NUMERIC_CODE = re.compile(r"[0-9]+")


class CountryCodeLookup(Protocol):
    """Read-only view over the ISO 3166-1 alpha-2, alpha-3 and numeric tables."""

    def is_valid_code(self, code: str) -> bool:  # pragma: no cover - runtime protocol
        """Return ``True`` when ``code`` is a known alpha-2, alpha-3 or numeric code."""

    def numeric_to_alpha2(self, code: str) -> Optional[str]:  # pragma: no cover - runtime protocol
        """Return the alpha-2 code for a three digit numeric code."""

    def alpha3_to_alpha2(self, code: str) -> Optional[str]:  # pragma: no cover - runtime protocol
        """Return the alpha-2 code for an alpha-3 code."""


class PycountryLookup:
    """Country lookup backed by the ``pycountry`` ISO 3166-1 database."""

    def is_valid_code(self, code: str) -> bool:
        text = (code or "").strip()
        if not text:
            return False
        if _NUMERIC_CODE.fullmatch(text):
            return self.numeric_to_alpha2(text) is not None
        if len(text) == 2:
            return pycountry.countries.get(alpha_2=text) is not None
        if len(text) == 3:
            return pycountry.countries.get(alpha_3=text) is not None
        return False

    def numeric_to_alpha2(self, code: str) -> Optional[str]:
        text = (code or "").strip()
        if not _NUMERIC_CODE.fullmatch(text):
            return None
        country = pycountry.countries.get(numeric=text.zfill(3))
        return country.alpha_2 if country is not None else None

    def alpha3_to_alpha2(self, code: str) -> Optional[str]:
        text = (code or "").strip()
        if len(text) != 3:
            return None
        country = pycountry.countries.get(alpha_3=text)
        return country.alpha_2 if country is not None else None


DEFAULT_LOOKUP: CountryCodeLookup = PycountryLookup()


def is_numeric_code(value: str) -> bool:
    return bool(_NUMERIC_CODE.fullmatch(value))


def coerce_numeric_country_code(value: str, lookup: CountryCodeLookup = DEFAULT_LOOKUP) -> str:
    """Replace a valid numeric code with its alpha-2 form, leaving anything else untouched.

    Alpha-3 codes are deliberately not converted here; the bulk importer performs
    that conversion when leads are persisted.
    """

    if not is_numeric_code(value):
        return value
    padded = f"{int(value):03d}"
    if not lookup.is_valid_code(padded):
        return value
    return lookup.numeric_to_alpha2(padded) or value


def convert_country_code_to_alpha2(value: str, lookup: CountryCodeLookup = DEFAULT_LOOKUP) -> Optional[str]:
    """Convert numeric and alpha-3 codes to alpha-2; other values pass through."""

    if is_numeric_code(value):
        return lookup.numeric_to_alpha2(f"{int(value):03d}")
    if len(value) == 3:
        return lookup.alpha3_to_alpha2(value)
    return value


def try_convert_country_code_to_alpha2(value: str, lookup: CountryCodeLookup = DEFAULT_LOOKUP) -> Optional[str]:
    """Return a valid upper-case alpha-2 code for ``value`` or ``None``."""

    converted = convert_country_code_to_alpha2(value, lookup)
    if converted is None or not lookup.is_valid_code(converted):
        return None
    return converted.upper()


__all__ = [
    "CountryCodeLookup",
    "PycountryLookup",
    "DEFAULT_LOOKUP",
    "is_numeric_code",
    "coerce_numeric_country_code",
    "convert_country_code_to_alpha2",
    "try_convert_country_code_to_alpha2",
]
