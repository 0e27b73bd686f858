"""Project inspection exports."""

from .models import ProjectInfo, TechStack
from .scanner import ManifestError, ProjectInspector, inspect_project

__all__ = [
    "ManifestError",
    "ProjectInfo",
    "ProjectInspector",
    "TechStack",
    "inspect_project",
]
