"""Pydantic models produced by the selection engine."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from create_scaffoldly.catalog import Framework


class OverwriteMode(str, Enum):
    """How to treat a non-empty target directory."""

    YES = "yes"
    NO = "no"
    IGNORE = "ignore"


class Selection(BaseModel):
    """Fully resolved answers that drive a scaffolding run."""

    project_name: str = Field(..., description="Empty when the target is the filesystem root")
    target_dir: str = Field(..., min_length=1, description="Formatted directory, relative to cwd")
    package_name: str | None = Field(
        default=None,
        description="Only collected when the project name is not a valid package name",
    )
    framework: Framework
    variant_branch: str = Field(..., min_length=1)
    overwrite_mode: OverwriteMode | None = None

    @property
    def resolved_name(self) -> str:
        """Name written into ``package.json`` and ``devcontainer.json``."""
        return self.package_name or self.project_name
