"""Read-only MCP resources exposing the memory bank documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .documents import DocumentStore

MARKDOWN_MIME_TYPE = "text/markdown"


class InvalidResourceError(ValueError):
    """Raised for resource URIs that do not map to a memory bank document."""


class ConfigurationMissingError(RuntimeError):
    """Raised when no project path is configured for resource reads."""


@dataclass(frozen=True, slots=True)
class ResourceSpec:
    uri: str
    document: str
    name: str
    title: str
    description: str


RESOURCES: tuple[ResourceSpec, ...] = (
    ResourceSpec(
        uri="memory://project/context",
        document="project_context",
        name="project_context",
        title="Project Context",
        description="Project overview, technical stack, and guidelines",
    ),
    ResourceSpec(
        uri="memory://active/context",
        document="active_context",
        name="active_context",
        title="Active Context",
        description="Current session state and tasks",
    ),
    ResourceSpec(
        uri="memory://progress",
        document="progress",
        name="progress_log",
        title="Progress Log",
        description="Project milestones and task tracking",
    ),
    ResourceSpec(
        uri="memory://decisions",
        document="decision_log",
        name="decision_log",
        title="Decision Log",
        description="Technical decisions and rationale",
    ),
)

RESOURCE_DOCUMENTS: dict[str, str] = {spec.uri: spec.document for spec in RESOURCES}


def document_for_uri(uri: str) -> str:
    try:
        return RESOURCE_DOCUMENTS[uri]
    except KeyError as exc:
        raise InvalidResourceError(f"Invalid URI: {uri}") from exc


def read_resource(uri: str, *, project_path: str | Path | None, store: DocumentStore) -> str:
    """Return the full markdown text behind a resource URI.

    Raises ConfigurationMissingError when no project path is configured,
    InvalidResourceError for unknown URIs, and DocumentNotFoundError when the
    document has not been created yet.
    """

    if project_path is None or not str(project_path).strip():
        raise ConfigurationMissingError("PROJECT_PATH environment variable not set")
    return store.read(project_path, document_for_uri(uri))


__all__ = [
    "ConfigurationMissingError",
    "InvalidResourceError",
    "MARKDOWN_MIME_TYPE",
    "RESOURCES",
    "RESOURCE_DOCUMENTS",
    "ResourceSpec",
    "document_for_uri",
    "read_resource",
]
