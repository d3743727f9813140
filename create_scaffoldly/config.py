"""create-scaffoldly configuration.

Centralised, typed configuration for the scaffolding pipeline.  Settings use
Pydantic v2 models so they are validated at construction time and can be
overridden from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from create_scaffoldly.catalog import FRAMEWORKS, Framework

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Global configuration for a scaffolding run.

    Instances are typically created once by the CLI entry point and passed to
    ``Pipeline``.
    """

    default_target_dir: str = Field(default="my-app", min_length=1)
    cwd: Path = Field(default_factory=Path.cwd)
    initial_branch: str = Field(default="development", min_length=1)
    commit_message: str = Field(default="Initial commit", min_length=1)
    http_timeout: float = Field(default=120, gt=0, description="Archive download timeout in seconds")
    git_timeout: float = Field(default=60, gt=0, description="Per git command timeout in seconds")
    scratch_prefix: str = Field(default="template-")
    download_base_url: str | None = Field(
        default=None,
        description="Overrides every framework's download base URL (mirrors, tests)",
    )
    cleanup_scratch: bool = Field(
        default=False,
        description="Remove the scratch directory once the template is materialized",
    )

    def frameworks(self) -> tuple[Framework, ...]:
        """Return the catalog with the download base URL override applied."""
        if not self.download_base_url:
            return FRAMEWORKS
        base = self.download_base_url.rstrip("/")
        return tuple(
            framework.model_copy(update={"download_base_url": base})
            for framework in FRAMEWORKS
        )

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLDLY_DOWNLOAD_BASE_URL, SCAFFOLDLY_INITIAL_BRANCH,
            SCAFFOLDLY_COMMIT_MESSAGE, SCAFFOLDLY_HTTP_TIMEOUT,
            SCAFFOLDLY_GIT_TIMEOUT, SCAFFOLDLY_CLEANUP_SCRATCH.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLDLY_DOWNLOAD_BASE_URL"):
            kwargs["download_base_url"] = os.environ["SCAFFOLDLY_DOWNLOAD_BASE_URL"]
        if os.environ.get("SCAFFOLDLY_INITIAL_BRANCH"):
            kwargs["initial_branch"] = os.environ["SCAFFOLDLY_INITIAL_BRANCH"]
        if os.environ.get("SCAFFOLDLY_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["SCAFFOLDLY_COMMIT_MESSAGE"]
        if os.environ.get("SCAFFOLDLY_HTTP_TIMEOUT"):
            kwargs["http_timeout"] = float(os.environ["SCAFFOLDLY_HTTP_TIMEOUT"])
        if os.environ.get("SCAFFOLDLY_GIT_TIMEOUT"):
            kwargs["git_timeout"] = float(os.environ["SCAFFOLDLY_GIT_TIMEOUT"])
        if os.environ.get("SCAFFOLDLY_CLEANUP_SCRATCH"):
            kwargs["cleanup_scratch"] = (
                os.environ["SCAFFOLDLY_CLEANUP_SCRATCH"].strip().lower() in _TRUTHY
            )
        return cls(**kwargs)
