"""Memory Bank diagnostics CLI."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from memory_bank_mcp.config import MemoryBankSettings
from memory_bank_mcp.documents import DOCUMENT_NAMES, DocumentStore
from memory_bank_mcp.inspector import ProjectInspector


def load_store(settings: MemoryBankSettings) -> DocumentStore:
    return DocumentStore(settings.memory_bank_dirname)


def _project_path(args: argparse.Namespace, settings: MemoryBankSettings) -> Path:
    path = args.project_path or settings.project_path
    if path is None:
        print("No project path given and PROJECT_PATH is not set")
        raise SystemExit(1)
    return Path(path)


def cmd_inspect(args: argparse.Namespace) -> None:
    settings = MemoryBankSettings()
    project = _project_path(args, settings)
    info, stack = ProjectInspector().inspect(project)
    payload = {
        "project": info.model_dump(by_alias=True),
        "stack": stack.model_dump(),
    }
    print(json.dumps(payload, indent=2))


def cmd_status(args: argparse.Namespace) -> None:
    settings = MemoryBankSettings()
    project = _project_path(args, settings)
    store = load_store(settings)
    documents = []
    for name in DOCUMENT_NAMES:
        path = store.path_for(project, name)
        exists = path.is_file()
        documents.append(
            {
                "document": name,
                "path": str(path),
                "exists": exists,
                "bytes": path.stat().st_size if exists else None,
            }
        )
    payload = {
        "directory": str(store.directory(project)),
        "initialized": all(entry["exists"] for entry in documents),
        "documents": documents,
    }
    print(json.dumps(payload, indent=2))
    if not payload["initialized"]:
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Memory Bank diagnostics")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="Show detected project metadata and tech stack")
    inspect_parser.add_argument("project_path", nargs="?", default=None)
    inspect_parser.set_defaults(func=cmd_inspect)

    status_parser = subparsers.add_parser("status", help="Report which memory bank documents exist")
    status_parser.add_argument("project_path", nargs="?", default=None)
    status_parser.set_defaults(func=cmd_status)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
