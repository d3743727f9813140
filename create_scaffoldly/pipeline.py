"""create-scaffoldly pipeline orchestrator.

Runs the scaffolding steps strictly in order:

1. SELECT      -- ask the applicable questions (or take them from the CLI).
2. PREPARE     -- empty or create the target directory.
3. FETCH       -- download and unpack the template branch archive.
4. MATERIALIZE -- copy the template and patch the package metadata.
5. COMMIT      -- ``git init`` on ``development`` and commit everything.
6. REPORT      -- print next steps.

Usage::

    create-scaffoldly my-app --template react-vite
    python -m create_scaffoldly . --overwrite ignore
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field
from rich.markup import escape

from create_scaffoldly.catalog import Framework, template_names
from create_scaffoldly.config import ScaffoldConfig
from create_scaffoldly.fetcher import FetchError, TemplateFetcher
from create_scaffoldly.repository import RepositoryInitializer, VcsError
from create_scaffoldly.selection import (
    OverwriteMode,
    Prompter,
    RichPrompter,
    SelectionCancelled,
    SelectionEngine,
)
from create_scaffoldly.utils import (
    CommandNotFoundError,
    console,
    print_error,
    print_instructions,
    print_step,
    print_success,
)
from create_scaffoldly.workspace import materialize, prepare_root


class ScaffoldResult(BaseModel):
    """Outcome of a pipeline run."""

    success: bool = False
    cancelled: bool = False
    root: Path | None = None
    framework: str | None = Field(default=None, description="Framework repo name")
    variant_branch: str | None = None


class Pipeline:
    """Drives a single scaffolding run.

    Attributes:
        config: Run configuration.
        prompter: Source of interactive answers.
        fetcher: Template archive fetcher.
        repository_factory: Builds the git initializer for a project root.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        prompter: Prompter | None = None,
        fetcher: TemplateFetcher | None = None,
        repository_factory: Callable[[Path], RepositoryInitializer] | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or RichPrompter()
        self.fetcher = fetcher or TemplateFetcher(
            timeout=config.http_timeout,
            scratch_prefix=config.scratch_prefix,
        )
        self.repository_factory = repository_factory or self._default_repository

    def _default_repository(self, root: Path) -> RepositoryInitializer:
        return RepositoryInitializer(
            root,
            initial_branch=self.config.initial_branch,
            commit_message=self.config.commit_message,
            timeout=self.config.git_timeout,
        )

    async def run(
        self,
        target_dir: str | None = None,
        template: str | None = None,
        overwrite: OverwriteMode | str | None = None,
    ) -> ScaffoldResult:
        """Scaffold a project.

        Returns:
            A ``ScaffoldResult``; ``cancelled`` is set when the user backed out,
            in which case nothing was written.

        Raises:
            FetchError, VcsError, CommandNotFoundError, OSError: Fatal failures.
                Files already written are left in place.
            ValueError: A template metadata file is not valid JSON.
        """
        cwd = self.config.cwd.resolve()
        engine = SelectionEngine(
            self.prompter,
            frameworks=self.config.frameworks(),
            cwd=cwd,
            default_target_dir=self.config.default_target_dir,
        )

        try:
            selection = engine.run(target_dir=target_dir, template=template, overwrite=overwrite)
        except SelectionCancelled as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            return ScaffoldResult(cancelled=True)

        root = (cwd / selection.target_dir).resolve()
        await asyncio.to_thread(prepare_root, root, selection.overwrite_mode)

        console.print()
        print_step(f"Scaffolding project in {escape(str(root))}...")
        template_root = await self.fetcher.fetch(selection.framework, selection.variant_branch)
        await asyncio.to_thread(materialize, template_root, root, selection)
        if self.config.cleanup_scratch:
            await asyncio.to_thread(self.fetcher.discard, template_root)

        print_step(f"Initializing git in {escape(str(root))}...")
        await self.repository_factory(root).initialize()

        console.print()
        print_success("Done.")
        print_instructions(
            render_instructions(root, cwd, selection.framework, self.config.initial_branch)
        )
        console.print("\n:rocket: Thanks for using Scaffoldly!\n")

        return ScaffoldResult(
            success=True,
            root=root,
            framework=selection.framework.repo,
            variant_branch=selection.variant_branch,
        )


def render_instructions(
    root: Path, cwd: Path, framework: Framework, initial_branch: str = "development"
) -> list[str]:
    """Next-step guidance printed after a successful run."""
    lines: list[str] = []
    if Path(root) != Path(cwd):
        rel = os.path.relpath(root, cwd)
        lines.append(f'    cd "{rel}"' if " " in rel else f"    cd {rel}")
    lines.extend([
        f"    {framework.start_command}",
        "",
        "Which will launch a devcontainer on your local machine.",
        "",
        "Alternatively, push this repository to GitHub to develop in GitHub Codespaces:",
        "",
        "    1) Create a new repository on GitHub",
        "    2) git remote add origin <repository-url>",
        f"    3) git push -u origin {initial_branch}",
        "    4) Open in GitHub Codespaces",
        "",
        "Once you're ready to deploy to AWS, run:",
        "",
        "    npx slydo deploy",
    ])
    return lines


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="create-scaffoldly",
        description="Scaffold a new project from a Scaffoldly template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-scaffoldly\n"
            "  create-scaffoldly my-app --template react-vite\n"
            "  create-scaffoldly . --overwrite ignore\n"
        ),
    )
    parser.add_argument(
        "target_dir",
        nargs="?",
        default=None,
        type=str,
        help="Directory to scaffold into (prompted for if omitted)",
    )
    parser.add_argument(
        "--template", "-t",
        default=None,
        help=f"Template to use: {', '.join(template_names())}",
    )
    parser.add_argument(
        "--overwrite",
        choices=[mode.value for mode in OverwriteMode],
        default=None,
        help="What to do when the target directory is not empty",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-scaffoldly``."""
    args = parse_args(argv)

    try:
        config = ScaffoldConfig.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    pipeline = Pipeline(config)
    try:
        asyncio.run(
            pipeline.run(
                target_dir=args.target_dir,
                template=args.template,
                overwrite=args.overwrite,
            )
        )
    except (FetchError, VcsError, CommandNotFoundError, OSError, ValueError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
