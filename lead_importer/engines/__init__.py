"""Email verification engine implementations."""

from .sample import SyntaxVerificationEngine  # noqa: F401

__all__ = ["SyntaxVerificationEngine"]
