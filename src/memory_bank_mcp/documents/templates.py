"""Initial contents for the four memory bank documents."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from ..inspector import ProjectInfo, TechStack
from .editor import (
    COMPLETED_MARKER,
    IN_PROGRESS_MARKER,
    PENDING_DECISIONS,
    TECHNICAL_DECISIONS,
    render_decision,
)
from .models import DecisionRecord

ARCHITECTURE_PRINCIPLES = (
    "Keep the memory bank current at the end of every working session",
    "Record technical decisions with their rationale before implementing them",
    "Track progress in small, verifiable increments",
)


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def _stamp(now: datetime) -> str:
    return now.strftime("%Y-%m-%d %H:%M:%S UTC")


def render_project_context(
    info: ProjectInfo,
    stack: TechStack,
    *,
    now: datetime | None = None,
) -> str:
    now = _now(now)
    overview = [f"- Name: {info.name}", f"- Version: {info.version}"]
    if info.description:
        overview.append(f"- Description: {info.description}")
    if info.license:
        overview.append(f"- License: {info.license}")

    technical: list[str] = []
    if stack.languages:
        technical.append(f"- Languages: {', '.join(stack.languages)}")
    if stack.frameworks:
        technical.append(f"- Frameworks: {', '.join(stack.frameworks)}")
    if stack.config_files:
        technical.append(f"- Configuration: {', '.join(stack.config_files)}")
    if not technical:
        technical.append("- Not detected")

    dependencies: list[str] = []
    if info.dependencies:
        dependencies.append("### Production\n" + "\n".join(f"- {name}" for name in info.dependencies))
    if info.dev_dependencies:
        dependencies.append(
            "### Development\n" + "\n".join(f"- {name}" for name in info.dev_dependencies)
        )
    if not dependencies:
        dependencies.append("- None declared")

    principles = "\n".join(f"- {item}" for item in ARCHITECTURE_PRINCIPLES)

    return (
        "# Project Context\n\n"
        "## Overview\n" + "\n".join(overview) + "\n\n"
        "## Technical Stack\n" + "\n".join(technical) + "\n\n"
        "## Dependencies\n" + "\n\n".join(dependencies) + "\n\n"
        "## Architecture Principles\n" + principles + "\n\n"
        "## Last Updated\n" + _stamp(now) + "\n"
    )


def render_active_context(info: ProjectInfo, *, now: datetime | None = None) -> str:
    now = _now(now)
    return (
        "# Active Context\n\n"
        "## Current Session\n"
        f"- Started: {_stamp(now)}\n"
        "- Mode: initialization\n"
        f"- Task: Memory bank initialized for {info.name}\n\n"
        "## Tasks\n"
        "- Review the generated project context\n\n"
        "## Open Questions\n"
        "- None recorded\n"
    )


def render_progress_log(*, now: datetime | None = None) -> str:
    now = _now(now)
    return (
        "# Progress Log\n\n"
        "## Current Phase\n"
        "Initialization\n\n"
        "## Completed Tasks\n"
        f"- {COMPLETED_MARKER} Memory bank initialized ({now.date().isoformat()})\n\n"
        "## In Progress\n"
        f"- {IN_PROGRESS_MARKER} Review the generated project context\n\n"
        "## Blocked\n"
        "- None\n"
    )


def synthesize_decisions(
    info: ProjectInfo,
    stack: TechStack,
    *,
    now: datetime | None = None,
) -> list[DecisionRecord]:
    """Seed the decision log with what inspection could infer about the project."""

    date = _now(now).date().isoformat()
    decisions = [
        DecisionRecord(
            title="Adopt a memory bank for project context",
            description=f"Track context, progress, and decisions for {info.name} in markdown.",
            rationale="Keeps session state and technical history available across sessions.",
            status="accepted",
            date=date,
        )
    ]
    if stack.languages:
        decisions.append(
            DecisionRecord(
                title="Implementation languages",
                description=f"The codebase uses {', '.join(stack.languages)}.",
                rationale="Detected from source file extensions in the project tree.",
                status="accepted",
                date=date,
            )
        )
    for framework in stack.frameworks:
        decisions.append(
            DecisionRecord(
                title=f"Use {framework}",
                description=f"{framework} is declared as a project dependency.",
                rationale="Detected from the dependencies declared in the project manifest.",
                status="accepted",
                date=date,
            )
        )
    return decisions


def render_decision_log(decisions: Iterable[DecisionRecord]) -> str:
    technical: list[str] = []
    pending: list[str] = []
    for decision in decisions:
        target = pending if decision.status == "proposed" else technical
        target.append(render_decision(decision))

    parts = ["# Decision Log", f"## {TECHNICAL_DECISIONS}", *technical, f"## {PENDING_DECISIONS}", *pending]
    return "\n\n".join(parts) + "\n"


def render_initial_documents(
    info: ProjectInfo,
    stack: TechStack,
    *,
    now: datetime | None = None,
) -> dict[str, str]:
    """Return initial text for every memory bank document, keyed by document name."""

    now = _now(now)
    return {
        "project_context": render_project_context(info, stack, now=now),
        "active_context": render_active_context(info, now=now),
        "progress": render_progress_log(now=now),
        "decision_log": render_decision_log(synthesize_decisions(info, stack, now=now)),
    }


__all__ = [
    "ARCHITECTURE_PRINCIPLES",
    "render_active_context",
    "render_decision_log",
    "render_initial_documents",
    "render_progress_log",
    "render_project_context",
    "synthesize_decisions",
]
