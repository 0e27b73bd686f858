"""File-backed storage for the four memory bank documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, get_args

DocumentName = Literal["project_context", "active_context", "progress", "decision_log"]

DOCUMENT_FILES: dict[str, str] = {
    "project_context": "projectContext.md",
    "active_context": "activeContext.md",
    "progress": "progress.md",
    "decision_log": "decisionLog.md",
}

DOCUMENT_NAMES: tuple[str, ...] = get_args(DocumentName)

logger = logging.getLogger(__name__)


class DocumentStoreError(RuntimeError):
    """Base class for document storage failures."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised when a memory bank document does not exist."""


class DocumentIOError(DocumentStoreError):
    """Raised when the filesystem rejects a read or write."""


class DocumentStore:
    """Read and write memory bank documents under a project-scoped directory."""

    def __init__(self, dirname: str = "memory-bank", *, encoding: str = "utf-8") -> None:
        self._dirname = dirname
        self._encoding = encoding

    @property
    def dirname(self) -> str:
        return self._dirname

    def directory(self, project_path: str | Path) -> Path:
        return Path(project_path) / self._dirname

    def path_for(self, project_path: str | Path, name: str) -> Path:
        try:
            filename = DOCUMENT_FILES[name]
        except KeyError as exc:
            raise ValueError(
                f"Unknown document '{name}'. Must be one of {sorted(DOCUMENT_FILES)}"
            ) from exc
        return self.directory(project_path) / filename

    def ensure_directory(self, project_path: str | Path) -> Path:
        directory = self.directory(project_path)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentIOError(f"Failed to create {directory}: {exc}") from exc
        return directory

    def exists(self, project_path: str | Path, name: str) -> bool:
        return self.path_for(project_path, name).is_file()

    def read(self, project_path: str | Path, name: str) -> str:
        path = self.path_for(project_path, name)
        try:
            return path.read_text(encoding=self._encoding)
        except FileNotFoundError as exc:
            raise DocumentNotFoundError(f"Failed to read file {path.name}: document not found") from exc
        except OSError as exc:
            raise DocumentIOError(f"Failed to read file {path.name}: {exc}") from exc

    def write(self, project_path: str | Path, name: str, text: str) -> Path:
        """Overwrite a document in place; the write is not atomic."""

        path = self.path_for(project_path, name)
        try:
            path.write_text(text, encoding=self._encoding)
        except OSError as exc:
            raise DocumentIOError(f"Failed to write file {path.name}: {exc}") from exc
        logger.debug("Wrote memory bank document", extra={"path": str(path), "bytes": len(text)})
        return path


__all__ = [
    "DOCUMENT_FILES",
    "DOCUMENT_NAMES",
    "DocumentIOError",
    "DocumentName",
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentStoreError",
]
