"""Derived project metadata models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectInfo(BaseModel):
    """Descriptive metadata declared in a project's manifest."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(default="Unknown", description="Declared project name.")
    version: str = Field(default="0.1.0", description="Declared project version.")
    description: str = Field(default="", description="Declared project description.")
    license: str = Field(default="", description="Declared license identifier.")
    dependencies: list[str] = Field(default_factory=list, description="Runtime dependency names.")
    dev_dependencies: list[str] = Field(
        default_factory=list,
        alias="devDependencies",
        description="Development-only dependency names.",
    )

    @property
    def all_dependencies(self) -> list[str]:
        return [*self.dependencies, *self.dev_dependencies]


class TechStack(BaseModel):
    """Languages, frameworks, and configuration files detected in a project."""

    model_config = ConfigDict(frozen=True)

    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    config_files: list[str] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.languages or self.frameworks or self.config_files)


__all__ = ["ProjectInfo", "TechStack"]
