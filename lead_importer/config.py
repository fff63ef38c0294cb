"""Configuration helpers for the lead importer."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


@dataclass(frozen=True)
class ImportSettings:
    """Options controlling how CSV text is read.

    ``delimiter`` left as ``None`` means tab for ``.tsv`` files and comma otherwise.
    """

    delimiter: Optional[str] = None
    quote_char: str = '"'
    encoding: str = "utf-8-sig"

    def __post_init__(self) -> None:
        if self.delimiter is not None and len(self.delimiter) != 1:
            raise ConfigurationError(f"CSV delimiter must be a single character, got {self.delimiter!r}")
        if len(self.quote_char) != 1:
            raise ConfigurationError(f"CSV quote character must be a single character, got {self.quote_char!r}")
        if (self.delimiter or ",") == self.quote_char:
            raise ConfigurationError("CSV delimiter and quote character must differ")


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except ValueError as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' is not valid JSON: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' could not be parsed: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


def settings_from_config(config: Optional[Mapping[str, Any]]) -> ImportSettings:
    """Build :class:`ImportSettings` from the ``import`` section of a configuration."""

    section = (config or {}).get("import") or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError("The 'import' configuration section must be a mapping")

    unknown = set(section) - {"delimiter", "quote_char", "encoding"}
    if unknown:
        LOGGER.warning("Ignoring unknown import settings: %s", ", ".join(sorted(unknown)))

    defaults = ImportSettings()
    delimiter = section.get("delimiter")
    return ImportSettings(
        delimiter=str(delimiter) if delimiter is not None else None,
        quote_char=str(section.get("quote_char", defaults.quote_char)),
        encoding=str(section.get("encoding", defaults.encoding)),
    )


def verification_config(config: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return the enabled ``verification`` section, or ``None`` when absent or disabled."""

    section = (config or {}).get("verification")
    if not section:
        return None
    if not isinstance(section, Mapping):
        raise ConfigurationError("The 'verification' configuration section must be a mapping")
    if not section.get("enabled", True):
        LOGGER.debug("Verification engine %s is disabled", section.get("class"))
        return None
    return dict(section)


__all__ = [
    "ConfigurationError",
    "ImportSettings",
    "load_configuration",
    "settings_from_config",
    "verification_config",
]
