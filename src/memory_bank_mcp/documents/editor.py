"""Append-only edits applied to memory bank documents."""

from __future__ import annotations

from typing import Iterable

from .markdown import SECTION_PREFIX, MarkdownDocument
from .models import DecisionRecord, ProgressSnapshot, SessionUpdate, today

TECHNICAL_DECISIONS = "Technical Decisions"
PENDING_DECISIONS = "Pending Decisions"

COMPLETED_MARKER = "✓"
IN_PROGRESS_MARKER = "→"
BLOCKED_MARKER = "⚠"


class SectionNotFoundError(LookupError):
    """Raised when a document lacks the section an edit targets."""


def _append_block(current: str, block: str) -> str:
    separator = "\n" if current.endswith("\n") else "\n\n"
    if not current:
        separator = ""
    return f"{current}{separator}{block}\n"


def _escape_section_headings(text: str) -> str:
    """Backslash-escape lines that would otherwise parse as a new section."""

    return "".join(
        f"\\{line}" if line.startswith(SECTION_PREFIX) else line
        for line in text.splitlines(keepends=True)
    )


def _bullets(items: Iterable[str], marker: str | None = None) -> str:
    prefix = f"- {marker} " if marker else "- "
    return "\n".join(f"{prefix}{item}" for item in items)


def merge_active_context(current: str, update: SessionUpdate, *, date: str | None = None) -> str:
    """Append a dated session update to the active context document."""

    session = update.current_session
    stamp = session.date.strip() or date or today()
    block = f"## Session Update ({stamp})\n- Mode: {session.mode}\n- Task: {session.task}"
    return _append_block(current, block)


def render_decision(decision: DecisionRecord) -> str:
    lines = [
        f"### {decision.title} ({decision.date})",
        decision.description,
        "",
        f"Status: {decision.status}",
    ]
    if decision.impact:
        lines.append(f"Impact: {decision.impact}")
    lines.extend(["", "Rationale:", decision.rationale])
    if decision.alternatives:
        lines.extend(["", "Alternatives Considered:", _bullets(decision.alternatives)])
    if decision.related_decisions:
        lines.extend(["", "Related Decisions:", _bullets(decision.related_decisions)])
    return _escape_section_headings("\n".join(lines))


def decision_section(decision: DecisionRecord) -> str:
    return PENDING_DECISIONS if decision.status == "proposed" else TECHNICAL_DECISIONS


def append_decision(current: str, decision: DecisionRecord) -> str:
    """Append a decision to the Technical or Pending Decisions section.

    Raises SectionNotFoundError when the document has no section with the
    target heading.
    """

    document = MarkdownDocument.parse(current)
    heading = decision_section(decision)
    section = document.find(heading)
    if section is None:
        raise SectionNotFoundError(
            f"Decision log has no '{heading}' section (found: {document.headings or 'none'})"
        )
    section.append(render_decision(decision))
    return document.render()


def render_progress(snapshot: ProgressSnapshot, *, heading: str = "Update", date: str | None = None) -> str:
    parts = [f"## {heading} ({date or today()})"]
    if snapshot.completed:
        parts.append("Completed:\n" + _bullets(snapshot.completed, COMPLETED_MARKER))
    if snapshot.in_progress:
        parts.append("In Progress:\n" + _bullets(snapshot.in_progress, IN_PROGRESS_MARKER))
    if snapshot.blocked:
        parts.append("Blocked:\n" + _bullets(snapshot.blocked, BLOCKED_MARKER))
    return "\n\n".join(parts)


def append_progress(
    current: str,
    snapshot: ProgressSnapshot,
    *,
    heading: str = "Update",
    date: str | None = None,
) -> str:
    """Append a dated progress block at the end of the progress document."""

    return _append_block(current, render_progress(snapshot, heading=heading, date=date))


__all__ = [
    "PENDING_DECISIONS",
    "SectionNotFoundError",
    "TECHNICAL_DECISIONS",
    "append_decision",
    "append_progress",
    "decision_section",
    "merge_active_context",
    "render_decision",
    "render_progress",
]
