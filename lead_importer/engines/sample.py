"""Example verification engines that run without network access."""
from __future__ import annotations

from typing import Iterable, Optional

from ..ingestion.validator import is_valid_email


class SyntaxVerificationEngine:
    """Treats any well-formed address as deliverable, optionally blocking domains."""

    name = "syntax"

    def __init__(self, blocked_domains: Optional[Iterable[str]] = None) -> None:
        self._blocked_domains = {domain.lower() for domain in blocked_domains or ()}

    def verify(self, email: str) -> bool:
        if not is_valid_email(email):
            return False
        domain = email.rsplit("@", 1)[1].lower()
        return domain not in self._blocked_domains
