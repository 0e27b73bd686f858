from pathlib import Path

import pytest

from memory_bank_mcp.documents import (
    DocumentIOError,
    DocumentNotFoundError,
    DocumentStore,
)


def test_write_then_read(tmp_path: Path) -> None:
    store = DocumentStore()
    directory = store.ensure_directory(tmp_path)

    path = store.write(tmp_path, "progress", "# Progress Log\n")

    assert directory == tmp_path / "memory-bank"
    assert path == directory / "progress.md"
    assert store.read(tmp_path, "progress") == "# Progress Log\n"
    assert store.exists(tmp_path, "progress")


def test_read_missing_document(tmp_path: Path) -> None:
    store = DocumentStore()
    store.ensure_directory(tmp_path)

    with pytest.raises(DocumentNotFoundError):
        store.read(tmp_path, "decision_log")


def test_write_without_directory_is_io_failure(tmp_path: Path) -> None:
    store = DocumentStore()

    with pytest.raises(DocumentIOError):
        store.write(tmp_path / "absent", "active_context", "text")


def test_write_overwrites_entire_file(tmp_path: Path) -> None:
    store = DocumentStore()
    store.ensure_directory(tmp_path)
    store.write(tmp_path, "active_context", "a much longer first version\n")

    store.write(tmp_path, "active_context", "short\n")

    assert store.read(tmp_path, "active_context") == "short\n"


def test_unknown_document_name(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        DocumentStore().path_for(tmp_path, "notes")


def test_custom_directory_name(tmp_path: Path) -> None:
    store = DocumentStore("docs-bank")

    assert store.path_for(tmp_path, "project_context") == tmp_path / "docs-bank" / "projectContext.md"
