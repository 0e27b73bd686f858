"""Memory bank documents: storage, structured edits, and templates."""

from .editor import (
    PENDING_DECISIONS,
    TECHNICAL_DECISIONS,
    SectionNotFoundError,
    append_decision,
    append_progress,
    merge_active_context,
)
from .markdown import MarkdownDocument, Section
from .models import DecisionRecord, ProgressSnapshot, SessionUpdate
from .store import (
    DOCUMENT_FILES,
    DOCUMENT_NAMES,
    DocumentIOError,
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
)
from .templates import render_initial_documents

__all__ = [
    "DOCUMENT_FILES",
    "DOCUMENT_NAMES",
    "DecisionRecord",
    "DocumentIOError",
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentStoreError",
    "MarkdownDocument",
    "PENDING_DECISIONS",
    "ProgressSnapshot",
    "Section",
    "SectionNotFoundError",
    "SessionUpdate",
    "TECHNICAL_DECISIONS",
    "append_decision",
    "append_progress",
    "merge_active_context",
    "render_initial_documents",
]
