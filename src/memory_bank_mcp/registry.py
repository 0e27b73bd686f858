"""Registration of the memory bank server in an MCP client settings file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class RegistryError(RuntimeError):
    """Raised when the MCP settings file cannot be read or updated."""


def load_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        document = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as exc:
        raise RegistryError(f"Settings file {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise RegistryError(f"Failed to read settings file {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise RegistryError(f"Settings file {path} must contain a JSON object")
    return document


def register_project(settings_file: Path, *, server_name: str, project_path: str | Path) -> dict[str, Any]:
    """Point the named server entry at ``project_path`` via its PROJECT_PATH env var.

    Existing keys in the settings file are preserved.
    """

    document = load_settings_file(settings_file)
    servers = document.setdefault("mcpServers", {})
    if not isinstance(servers, dict):
        raise RegistryError(f"'mcpServers' in {settings_file} must be a JSON object")
    entry = servers.setdefault(server_name, {})
    if not isinstance(entry, dict):
        raise RegistryError(f"Server entry '{server_name}' in {settings_file} must be a JSON object")
    env = entry.setdefault("env", {})
    if not isinstance(env, dict):
        raise RegistryError(f"'env' for server '{server_name}' must be a JSON object")
    env["PROJECT_PATH"] = str(project_path)

    try:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise RegistryError(f"Failed to write settings file {settings_file}: {exc}") from exc

    logger.info(
        "Registered project in MCP settings",
        extra={"settings_file": str(settings_file), "server": server_name, "project_path": str(project_path)},
    )
    return entry


__all__ = ["RegistryError", "load_settings_file", "register_project"]
