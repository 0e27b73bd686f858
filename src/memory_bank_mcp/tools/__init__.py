"""Tool registration for Memory Bank MCP."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from fastmcp import Context, FastMCP
from pydantic import BaseModel, ValidationError

from ..config import MemoryBankSettings
from ..documents import (
    DOCUMENT_NAMES,
    DecisionRecord,
    DocumentStore,
    DocumentStoreError,
    ProgressSnapshot,
    SessionUpdate,
    append_decision,
    append_progress,
    merge_active_context,
    render_initial_documents,
)
from ..inspector import ProjectInspector
from ..registry import register_project
from ..resources import InvalidResourceError
from .tally import ProgressTally

ModelT = TypeVar("ModelT", bound=BaseModel)

AUTO_SAVE_HEADING = "Auto-saved Summary"


class MissingArgumentError(ValueError):
    """Raised when a required request field is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required argument: {field}")
        self.field = field


class OperationFailedError(RuntimeError):
    """Wraps any failure raised while carrying out a tool call."""


@dataclass(slots=True)
class ToolHandles:
    initialize_memory_bank: Any
    update_context: Any
    record_decision: Any
    track_progress: Any
    read_memory_bank: Any
    progress_tally: ProgressTally


def _require(field: str, value: Any) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingArgumentError(field)


def _parse(model: type[ModelT], payload: Any, field: str) -> ModelT:
    _require(field, payload)
    try:
        if isinstance(payload, str):
            return model.model_validate_json(payload)
        return model.model_validate(payload)
    except ValidationError as exc:
        for error in exc.errors():
            if error.get("type") == "missing":
                location = ".".join(str(part) for part in error.get("loc", ()))
                raise MissingArgumentError(f"{field}.{location}") from exc
        raise OperationFailedError(f"Invalid {field}: {exc}") from exc


def register_tools(
    server: FastMCP,
    *,
    settings: MemoryBankSettings,
    store: DocumentStore,
    inspector: ProjectInspector,
    progress_tally: ProgressTally | None = None,
) -> ToolHandles:
    """Register the memory bank tools on the server."""

    tally = progress_tally or ProgressTally(threshold=settings.progress_flush_threshold)

    def _update_document(project_path: str, name: str, edit) -> Path:
        current = store.read(project_path, name)
        return store.write(project_path, name, edit(current))

    async def _auto_save(project_path: str, snapshot: ProgressSnapshot, context: Context | None) -> bool:
        try:
            _update_document(
                project_path,
                "progress",
                lambda current: append_progress(current, snapshot, heading=AUTO_SAVE_HEADING),
            )
        except DocumentStoreError as exc:
            await _emit_log(
                context,
                "warning",
                "Automatic progress save failed",
                extra={"project_path": project_path, "error": str(exc)},
            )
            return False
        await _emit_log(
            context,
            "info",
            "Automatically saved accumulated progress",
            extra={
                "project_path": project_path,
                "completed": len(snapshot.completed),
                "in_progress": len(snapshot.in_progress),
            },
        )
        return True

    async def _initialize_memory_bank(
        projectPath: str | None = None,
        context: Context | None = None,
    ) -> str:
        """Create the memory bank directory and write all four documents."""

        _require("projectPath", projectPath)
        try:
            directory = store.ensure_directory(projectPath)
            info, stack = inspector.inspect(projectPath)
            for name, text in render_initial_documents(info, stack).items():
                store.write(projectPath, name, text)
            if settings.mcp_settings_path is not None:
                register_project(
                    settings.mcp_settings_path,
                    server_name=settings.server_name,
                    project_path=Path(projectPath).resolve(),
                )
        except Exception as exc:
            raise OperationFailedError(f"Failed to initialize Memory Bank: {exc}") from exc

        await _emit_log(
            context,
            "info",
            "Initialized memory bank",
            extra={
                "project_path": projectPath,
                "project_name": info.name,
                "languages": stack.languages,
                "frameworks": stack.frameworks,
            },
        )
        return f"Memory Bank initialized successfully at {directory}"

    async def _update_context(
        projectPath: str | None = None,
        content: dict[str, Any] | str | None = None,
        context: Context | None = None,
    ) -> str:
        """Append a session update to the active context."""

        _require("projectPath", projectPath)
        update = _parse(SessionUpdate, content, "content")
        try:
            _update_document(
                projectPath,
                "active_context",
                lambda current: merge_active_context(current, update),
            )
        except Exception as exc:
            raise OperationFailedError(f"Failed to update context: {exc}") from exc

        await _emit_log(
            context,
            "info",
            "Updated active context",
            extra={"project_path": projectPath, "mode": update.current_session.mode},
        )
        return "Active context updated successfully"

    async def _record_decision(
        projectPath: str | None = None,
        decision: dict[str, Any] | str | None = None,
        context: Context | None = None,
    ) -> str:
        """Record a technical decision in the decision log."""

        _require("projectPath", projectPath)
        record = _parse(DecisionRecord, decision, "decision")
        try:
            _update_document(
                projectPath,
                "decision_log",
                lambda current: append_decision(current, record),
            )
        except Exception as exc:
            raise OperationFailedError(f"Failed to record decision: {exc}") from exc

        await _emit_log(
            context,
            "info",
            "Recorded decision",
            extra={"project_path": projectPath, "title": record.title, "status": record.status},
        )
        return "Decision recorded successfully"

    async def _track_progress(
        projectPath: str | None = None,
        progress: dict[str, Any] | str | None = None,
        context: Context | None = None,
    ) -> str:
        """Append a progress update; every ``threshold`` calls also saves a summary."""

        _require("projectPath", projectPath)
        snapshot = _parse(ProgressSnapshot, progress, "progress")
        try:
            _update_document(
                projectPath,
                "progress",
                lambda current: append_progress(current, snapshot),
            )
        except Exception as exc:
            raise OperationFailedError(f"Failed to update progress: {exc}") from exc

        flushed = tally.record(snapshot)
        if flushed is not None:
            await _auto_save(projectPath, flushed, context)

        await _emit_log(
            context,
            "debug",
            "Tracked progress",
            extra={"project_path": projectPath, "tally_calls": tally.calls},
        )
        return "Progress updated successfully"

    async def _read_memory_bank(
        projectPath: str | None = None,
        document: str | None = None,
        context: Context | None = None,
    ) -> str:
        """Return the full text of one memory bank document."""

        _require("projectPath", projectPath)
        _require("document", document)
        if document not in DOCUMENT_NAMES:
            raise InvalidResourceError(
                f"Unknown document '{document}'. Must be one of {list(DOCUMENT_NAMES)}"
            )
        try:
            text = store.read(projectPath, document)
        except DocumentStoreError as exc:
            raise OperationFailedError(f"Failed to read Memory Bank document: {exc}") from exc
        await _emit_log(
            context,
            "debug",
            "Read memory bank document",
            extra={"project_path": projectPath, "document": document},
        )
        return text

    server.tool(
        name="initialize_memory_bank",
        description="Initialize Memory Bank structure for a project.",
    )(_initialize_memory_bank)

    server.tool(
        name="update_context",
        description=(
            "Update active context with current session information. "
            "content = {currentSession: {date, mode, task}}."
        ),
    )(_update_context)

    server.tool(
        name="record_decision",
        description=(
            "Add a technical decision with rationale. Proposed decisions are filed under "
            "Pending Decisions, all others under Technical Decisions."
        ),
    )(_record_decision)

    server.tool(
        name="track_progress",
        description="Update project progress with completed, in-progress, and blocked tasks.",
    )(_track_progress)

    server.tool(
        name="read_memory_bank",
        description=(
            "Read a memory bank document for an explicit project path "
            "(project_context, active_context, progress, decision_log)."
        ),
    )(_read_memory_bank)

    return ToolHandles(
        initialize_memory_bank=_initialize_memory_bank,
        update_context=_update_context,
        record_decision=_record_decision,
        track_progress=_track_progress,
        read_memory_bank=_read_memory_bank,
        progress_tally=tally,
    )


logger = logging.getLogger(__name__)


async def _emit_log(
    context: Context | None,
    level: str,
    message: str,
    *,
    extra: dict[str, Any] | None = None,
) -> None:
    """Log locally and mirror the message to the MCP client when a context is available."""

    payload = extra or {}
    getattr(logger, level, logger.info)(message, extra=payload)

    if context is not None:
        ctx_log = getattr(context, level, None)
        if callable(ctx_log):
            await ctx_log(message)


__all__ = [
    "MissingArgumentError",
    "OperationFailedError",
    "ProgressTally",
    "ToolHandles",
    "register_tools",
]
