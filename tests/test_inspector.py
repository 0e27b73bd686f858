import json
from pathlib import Path
import textwrap

from memory_bank_mcp.inspector import ProjectInfo, ProjectInspector, TechStack, inspect_project
from memory_bank_mcp.inspector import scanner


def _touch(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_inspects_node_project(tmp_path: Path) -> None:
    _touch(
        tmp_path / "package.json",
        json.dumps(
            {
                "name": "demo",
                "version": "1.2.3",
                "description": "Demo app",
                "license": "MIT",
                "dependencies": {"react": "^18.0.0", "express": "^4.0.0"},
                "devDependencies": {"jest": "^29.0.0", "typescript": "^5.0.0"},
            }
        ),
    )
    _touch(tmp_path / "tsconfig.json", "{}")
    _touch(tmp_path / "Dockerfile")
    _touch(tmp_path / "src" / "app.ts")
    _touch(tmp_path / "src" / "view.tsx")
    _touch(tmp_path / "lib" / "util.js")
    _touch(tmp_path / "lib" / "tsconfig.json", "{}")
    _touch(tmp_path / "node_modules" / "pkg" / "setup.py")
    _touch(tmp_path / "memory-bank" / "notes.rb")

    info, stack = ProjectInspector().inspect(tmp_path)

    assert info.name == "demo"
    assert info.version == "1.2.3"
    assert info.description == "Demo app"
    assert info.license == "MIT"
    assert info.dependencies == ["react", "express"]
    assert info.dev_dependencies == ["jest", "typescript"]
    assert stack.languages == ["JavaScript", "TypeScript", "TypeScript (React)"]
    assert stack.frameworks == ["React", "Express", "Jest"]
    assert stack.config_files == ["Dockerfile", "package.json", "tsconfig.json"]


def test_missing_manifest_uses_defaults(tmp_path: Path) -> None:
    _touch(tmp_path / "main.py")

    info, stack = inspect_project(tmp_path)

    assert info == ProjectInfo()
    assert info.name == "Unknown"
    assert info.version == "0.1.0"
    assert stack.languages == ["Python"]
    assert stack.frameworks == []


def test_invalid_manifest_uses_defaults(tmp_path: Path) -> None:
    _touch(tmp_path / "package.json", "{not json")

    info, stack = ProjectInspector().inspect(tmp_path)

    assert info == ProjectInfo()
    assert stack.config_files == ["package.json"]


def test_non_mapping_manifest_uses_defaults(tmp_path: Path) -> None:
    _touch(tmp_path / "package.json", "[1, 2, 3]")

    info, _ = ProjectInspector().inspect(tmp_path)

    assert info.name == "Unknown"


def test_pubspec_manifest(tmp_path: Path) -> None:
    _touch(
        tmp_path / "pubspec.yaml",
        textwrap.dedent(
            """
            name: field_notes
            version: 1.0.0+1
            description: Notes app
            dependencies:
              flutter:
                sdk: flutter
            dev_dependencies:
              flutter_test:
                sdk: flutter
            """
        ).strip(),
    )
    _touch(tmp_path / "lib" / "main.dart")

    info, stack = ProjectInspector().inspect(tmp_path)

    assert info.name == "field_notes"
    assert info.version == "1.0.0+1"
    assert info.dev_dependencies == ["flutter_test"]
    assert stack.frameworks == ["Flutter"]
    assert stack.languages == ["Dart"]


def test_unreadable_tree_degrades_to_empty_stack(tmp_path: Path, monkeypatch) -> None:
    _touch(tmp_path / "package.json", json.dumps({"name": "demo", "dependencies": {"react": "1"}}))

    def _boom(*_args, **_kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(scanner.os, "walk", _boom)

    info, stack = ProjectInspector().inspect(tmp_path)

    assert info.name == "demo"
    assert stack == TechStack()
    assert stack.empty


def test_nonexistent_project_path(tmp_path: Path) -> None:
    info, stack = ProjectInspector().inspect(tmp_path / "missing")

    assert info.name == "Unknown"
    assert stack.empty


def test_detect_frameworks_scans_each_package_once() -> None:
    inspector = ProjectInspector()

    assert inspector.detect_frameworks(["vue", "react", "react", "lodash"]) == ["React", "Vue.js"]


def test_undecodable_manifest_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_bytes(b'{"name": "\xff\xfe"}')

    info, stack = ProjectInspector().inspect(tmp_path)

    assert info == ProjectInfo()
    assert stack.config_files == ["package.json"]
