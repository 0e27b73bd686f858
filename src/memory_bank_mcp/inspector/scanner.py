"""Manifest parsing and directory scanning for project inspection."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml
from pydantic import ValidationError

from .models import ProjectInfo, TechStack

logger = logging.getLogger(__name__)

LANGUAGE_EXTENSIONS: dict[str, str] = {
    ".ts": "TypeScript",
    ".tsx": "TypeScript (React)",
    ".js": "JavaScript",
    ".jsx": "JavaScript (React)",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".py": "Python",
    ".java": "Java",
    ".kt": "Kotlin",
    ".go": "Go",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".cpp": "C++",
    ".c": "C",
    ".swift": "Swift",
    ".dart": "Dart",
    ".html": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".vue": "Vue",
    ".svelte": "Svelte",
}

CONFIG_FILENAMES: frozenset[str] = frozenset(
    {
        "package.json",
        "tsconfig.json",
        "pubspec.yaml",
        ".eslintrc",
        ".eslintrc.js",
        ".eslintrc.json",
        ".prettierrc",
        ".prettierrc.json",
        "babel.config.js",
        "webpack.config.js",
        "vite.config.js",
        "vite.config.ts",
        "jest.config.js",
        "jest.config.ts",
        "next.config.js",
        "tailwind.config.js",
        "Dockerfile",
        "docker-compose.yml",
        "docker-compose.yaml",
        ".gitignore",
        ".env.example",
        "pyproject.toml",
        "requirements.txt",
        "Cargo.toml",
        "go.mod",
    }
)

FRAMEWORK_PACKAGES: dict[str, str] = {
    "react": "React",
    "next": "Next.js",
    "vue": "Vue.js",
    "nuxt": "Nuxt",
    "@angular/core": "Angular",
    "svelte": "Svelte",
    "express": "Express",
    "@nestjs/core": "NestJS",
    "fastify": "Fastify",
    "koa": "Koa",
    "electron": "Electron",
    "react-native": "React Native",
    "tailwindcss": "Tailwind CSS",
    "jest": "Jest",
    "mocha": "Mocha",
    "vitest": "Vitest",
    "@modelcontextprotocol/sdk": "Model Context Protocol SDK",
    "flutter": "Flutter",
}

SKIPPED_DIRECTORIES: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "memory-bank",
        "dist",
        "build",
        "coverage",
        "__pycache__",
        ".venv",
        "venv",
        ".dart_tool",
    }
)


class ManifestError(ValueError):
    """Raised when a manifest file exists but cannot be interpreted."""


def _dependency_names(value: Any) -> list[str]:
    if isinstance(value, Mapping):
        return [str(key) for key in value.keys()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


def _parse_package_json(text: str) -> dict[str, Any]:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON: {exc}") from exc


def _parse_pubspec(text: str) -> dict[str, Any]:
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML: {exc}") from exc


# Tried in order; the first manifest present wins.
MANIFESTS: tuple[tuple[str, Any, str], ...] = (
    ("package.json", _parse_package_json, "devDependencies"),
    ("pubspec.yaml", _parse_pubspec, "dev_dependencies"),
)


class ProjectInspector:
    """Derive project metadata and a tech stack summary from a project tree."""

    def __init__(
        self,
        *,
        language_extensions: Mapping[str, str] | None = None,
        config_filenames: Iterable[str] | None = None,
        framework_packages: Mapping[str, str] | None = None,
        skipped_directories: Iterable[str] | None = None,
    ) -> None:
        self._languages = dict(language_extensions or LANGUAGE_EXTENSIONS)
        self._configs = frozenset(config_filenames or CONFIG_FILENAMES)
        self._frameworks = dict(framework_packages or FRAMEWORK_PACKAGES)
        self._skipped = frozenset(skipped_directories or SKIPPED_DIRECTORIES)

    def inspect(self, project_path: str | Path) -> tuple[ProjectInfo, TechStack]:
        """Return manifest metadata and the detected tech stack.

        Never raises: manifest problems fall back to default metadata and
        filesystem errors during the walk yield an empty stack.
        """

        root = Path(project_path)
        info = self.load_project_info(root)
        try:
            languages, configs = self._scan_tree(root)
        except OSError as exc:
            logger.warning(
                "Project scan failed; reporting empty tech stack",
                extra={"project_path": str(root), "error": str(exc)},
            )
            return info, TechStack()

        frameworks = self.detect_frameworks(info.all_dependencies)
        stack = TechStack(
            languages=sorted(languages),
            frameworks=frameworks,
            config_files=configs,
        )
        return info, stack

    def load_project_info(self, root: Path) -> ProjectInfo:
        for filename, parser, dev_key in MANIFESTS:
            path = root / filename
            if not path.is_file():
                continue
            try:
                document = parser(path.read_text(encoding="utf-8"))
                return self._project_info_from(document, dev_key)
            except (OSError, UnicodeDecodeError, ManifestError, ValidationError) as exc:
                logger.warning(
                    "Unable to read project manifest; using defaults",
                    extra={"manifest": str(path), "error": str(exc)},
                )
                return ProjectInfo()
        return ProjectInfo()

    @staticmethod
    def _project_info_from(document: Any, dev_key: str) -> ProjectInfo:
        if not isinstance(document, Mapping):
            raise ManifestError("Manifest root must be a mapping")

        fields: dict[str, Any] = {
            "dependencies": _dependency_names(document.get("dependencies")),
            "dev_dependencies": _dependency_names(document.get(dev_key)),
        }
        for key in ("name", "version", "description", "license"):
            value = document.get(key)
            if value not in (None, ""):
                fields[key] = str(value)
        return ProjectInfo.model_validate(fields)

    def detect_frameworks(self, dependency_names: Iterable[str]) -> list[str]:
        declared = set(dependency_names)
        return [label for package, label in self._frameworks.items() if package in declared]

    def _scan_tree(self, root: Path) -> tuple[set[str], list[str]]:
        def _raise(error: OSError) -> None:
            raise error

        languages: set[str] = set()
        configs: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames[:] = sorted(name for name in dirnames if name not in self._skipped)
            for filename in sorted(filenames):
                label = self._languages.get(Path(filename).suffix.lower())
                if label:
                    languages.add(label)
                if filename in self._configs and filename not in configs:
                    configs.append(filename)
        return languages, configs


def inspect_project(project_path: str | Path) -> tuple[ProjectInfo, TechStack]:
    """Convenience wrapper using the default detection tables."""

    return ProjectInspector().inspect(project_path)


__all__ = [
    "CONFIG_FILENAMES",
    "FRAMEWORK_PACKAGES",
    "LANGUAGE_EXTENSIONS",
    "ManifestError",
    "ProjectInspector",
    "inspect_project",
]
