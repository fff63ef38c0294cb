"""Command line interface for validating lead CSV files."""
from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .config import ConfigurationError, ImportSettings, load_configuration, settings_from_config
from .factory import build_verification_engine
from .ingestion import CsvImportError, UnsupportedFileTypeError, export_validated_leads, load_leads
from .models import ValidatedLead
from .orchestrator import BulkImporter, EmailVerificationService, InMemoryLeadStore


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Validate a lead CSV file and write a per-row validation report",
    )
    parser.add_argument("input", help="Path to the input CSV file")
    parser.add_argument("output", help="Path where the validation report should be written (CSV, TSV or XLSX)")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an optional configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify the email addresses of importable rows with the configured engine",
    )
    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Run email verification for several leads at once",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Maximum number of workers to use in concurrent mode",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        config = load_configuration(args.config) if args.config else {}
        settings: Optional[ImportSettings] = settings_from_config(config) if config.get("import") else None
        leads = load_leads(args.input, settings=settings)
    except (CsvImportError, UnsupportedFileTypeError, ConfigurationError) as exc:
        logging.error("%s", exc)
        return 1

    counts = Counter(lead.validation_status.value for lead in leads)
    logging.info(
        "Validated %s rows: %s valid, %s with warnings, %s invalid",
        len(leads),
        counts.get("valid", 0),
        counts.get("warning", 0),
        counts.get("invalid", 0),
    )

    extra_columns: Dict[int, Dict[str, Any]] = {}
    if args.verify:
        try:
            extra_columns = _verify_importable_leads(
                leads,
                config,
                concurrent=args.concurrent,
                max_workers=args.max_workers,
            )
        except ConfigurationError as exc:
            logging.error("%s", exc)
            return 1

    destination = export_validated_leads(leads, args.output, extra_columns=extra_columns)
    logging.info("Validation report written to %s", Path(destination).resolve())
    return 0


def _verify_importable_leads(
    leads: List[ValidatedLead],
    config: Mapping[str, Any],
    *,
    concurrent: bool,
    max_workers: Optional[int],
) -> Dict[int, Dict[str, Any]]:
    engine = build_verification_engine(config)
    if engine is None:
        logging.warning("No verification engine is configured - skipping email verification")
        return {}

    importable = [lead for lead in leads if lead.is_importable]
    if not importable:
        logging.warning("No importable rows - skipping email verification")
        return {}

    store = InMemoryLeadStore()
    imported = BulkImporter(store).import_leads(importable)
    row_by_id = {item.stored.id: item.source.row_index for item in imported.created}
    if not row_by_id:
        return {}

    service = EmailVerificationService(engine, store, concurrent=concurrent, max_workers=max_workers)
    batch = service.verify_leads(list(row_by_id))

    extra_columns: Dict[int, Dict[str, Any]] = {}
    for outcome in batch.results:
        extra_columns[row_by_id[outcome.lead_id]] = {"emailVerified": outcome.email_verified}
    for failure in batch.errors:
        extra_columns[row_by_id[failure.lead_id]] = {"emailVerified": None, "verificationError": failure.error}
    logging.info("Verified %s of %s emails with %s", batch.verified_count, len(row_by_id), engine.name)
    return extra_columns


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
