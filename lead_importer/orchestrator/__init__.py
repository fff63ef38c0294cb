"""Batch services that persist, verify and message imported leads."""

from .bulk_import import BulkImporter, BulkImportError, BulkImportResult, ImportFailure
from .messages import MessageGenerationService, TemplateError, generate_message_from_template
from .store import InMemoryLeadStore, LeadStore, NewLead, StoredLead
from .verification import EmailVerificationService, VerificationBatchResult, VerificationEngine

__all__ = [
    "BulkImporter",
    "BulkImportError",
    "BulkImportResult",
    "ImportFailure",
    "EmailVerificationService",
    "VerificationBatchResult",
    "VerificationEngine",
    "InMemoryLeadStore",
    "LeadStore",
    "NewLead",
    "StoredLead",
    "MessageGenerationService",
    "TemplateError",
    "generate_message_from_template",
]
