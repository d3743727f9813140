"""Registry of the templates create-scaffoldly can scaffold.

Each ``Framework`` is a GitHub repository and each ``Variant`` is one of its
branches.  The registry is an immutable tuple built at import time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Variant(BaseModel):
    """A branch of a framework repository."""

    model_config = ConfigDict(frozen=True)

    branch: str = Field(..., min_length=1)
    display_name: str = Field(default="")
    color: str = Field(default="blue", description="Rich style used in choice lists")

    @property
    def title(self) -> str:
        return self.display_name or self.branch


class Framework(BaseModel):
    """A template family hosted as a repository with one branch per variant."""

    model_config = ConfigDict(frozen=True)

    repo: str = Field(..., min_length=1)
    display_name: str = Field(default="")
    color: str = Field(default="yellow", description="Rich style used in choice lists")
    download_base_url: str = Field(..., min_length=1)
    start_command: str = Field(default="")
    variants: tuple[Variant, ...] = Field(default=())
    default_branch: str = Field(
        default="main",
        description="Branch used when the framework declares no variants",
    )

    @property
    def title(self) -> str:
        return self.display_name or self.repo

    def archive_url(self, branch: str) -> str:
        """URL of the zip archive for *branch*."""
        return f"{self.download_base_url.rstrip('/')}/{self.repo}/zip/refs/heads/{branch}"

    def get_variant(self, branch: str) -> Variant | None:
        for variant in self.variants:
            if variant.branch == branch:
                return variant
        return None

    def template_names(self) -> list[str]:
        """Names accepted by ``--template`` for this framework."""
        if self.variants:
            return [variant.branch for variant in self.variants]
        return [self.repo]


FRAMEWORKS: tuple[Framework, ...] = (
    Framework(
        repo="stack-aws-serverless-express",
        display_name="Serverless + Express on AWS",
        color="yellow",
        download_base_url="https://codeload.github.com/scaffoldly",
        start_command="yarn dev",
        variants=(
            Variant(branch="headless", display_name="Backend API (No Frontend)", color="blue"),
            Variant(
                branch="react-vite",
                display_name="Backend API + React Frontend (w/Vite)",
                color="blue",
            ),
            Variant(branch="angular", display_name="Backend API + Angular Frontend", color="blue"),
        ),
    ),
)


def template_names(frameworks: tuple[Framework, ...] = FRAMEWORKS) -> list[str]:
    """Every template name across the catalog, in catalog order."""
    names: list[str] = []
    for framework in frameworks:
        names.extend(framework.template_names())
    return names


def resolve_template(
    name: str, frameworks: tuple[Framework, ...] = FRAMEWORKS
) -> tuple[Framework, str] | None:
    """Find the framework owning template *name*.

    Returns:
        ``(framework, branch)`` or ``None`` if the name is unknown.  A
        framework without variants is addressed by its repo name and resolves
        to its ``default_branch``.
    """
    for framework in frameworks:
        if framework.get_variant(name) is not None:
            return framework, name
        if not framework.variants and framework.repo == name:
            return framework, framework.default_branch
    return None

