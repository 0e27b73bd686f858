"""Request models for memory bank updates."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DecisionStatus = Literal["proposed", "accepted", "rejected", "superseded"]


def today() -> str:
    """Return the current UTC date as YYYY-MM-DD."""

    return datetime.now(timezone.utc).date().isoformat()


def _ensure_list(value: Any):
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise ValueError("Expected a sequence of strings")


class DecisionRecord(BaseModel):
    """A technical decision with its rationale."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., description="Short title identifying the decision.")
    description: str = Field(..., description="What was decided.")
    rationale: str = Field(..., description="Why the decision was made.")
    status: DecisionStatus = Field(
        default="accepted",
        description="Lifecycle status; proposed decisions land under Pending Decisions.",
    )
    alternatives: list[str] | None = Field(
        default=None, description="Alternatives that were considered and not chosen."
    )
    impact: str | None = Field(default=None, description="Expected impact of the decision.")
    related_decisions: list[str] | None = Field(
        default=None,
        alias="relatedDecisions",
        description="Titles of related decisions.",
    )
    date: str = Field(default_factory=today, description="Decision date (YYYY-MM-DD).")

    @field_validator("alternatives", "related_decisions", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Any):
        return _ensure_list(value)

    @field_validator("date", mode="before")
    @classmethod
    def _default_blank_date(cls, value: Any):
        if value is None or (isinstance(value, str) and not value.strip()):
            return today()
        return value


class ProgressSnapshot(BaseModel):
    """One progress reporting event."""

    model_config = ConfigDict(populate_by_name=True)

    completed: list[str]
    in_progress: list[str] = Field(..., alias="inProgress")
    blocked: list[str] | None = None

    @field_validator("completed", "in_progress", "blocked", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Any):
        return _ensure_list(value)


class CurrentSession(BaseModel):
    date: str = ""
    mode: str
    task: str


class SessionUpdate(BaseModel):
    """Update describing the session currently in progress."""

    model_config = ConfigDict(populate_by_name=True)

    current_session: CurrentSession = Field(..., alias="currentSession")


__all__ = [
    "CurrentSession",
    "DecisionRecord",
    "DecisionStatus",
    "ProgressSnapshot",
    "SessionUpdate",
    "today",
]
