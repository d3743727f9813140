"""Git repository initialisation for a freshly scaffolded project."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from rich.markup import escape

from create_scaffoldly.utils import console, resolve_command


class VcsError(Exception):
    """Raised when a git operation fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


async def _run_git(
    git: str,
    *args: str,
    cwd: str | Path,
    timeout: float = 60.0,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises VcsError if the command cannot start, times out, or exits non-zero.
    """
    cmd = [git] + list(args)
    cmd_str = " ".join(["git"] + list(args))

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd),
        )
    except OSError as exc:
        raise VcsError(f"Could not start git: {exc}", command=cmd_str) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        raise VcsError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise VcsError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


class RepositoryInitializer:
    """Creates the project's git repository and its first commit.

    Failures are raised, never swallowed, and files already written to the
    project directory are left in place.
    """

    def __init__(
        self,
        root: str | Path,
        initial_branch: str = "development",
        commit_message: str = "Initial commit",
        which: Callable[[str], str] = resolve_command,
        timeout: float = 60.0,
    ) -> None:
        self.root = Path(root)
        self.initial_branch = initial_branch
        self.commit_message = commit_message
        self.which = which
        self.timeout = timeout

    async def initialize(self) -> None:
        """``git init`` on the initial branch, stage everything, and commit.

        Raises:
            CommandNotFoundError: If ``git`` is not installed.
            VcsError: If any git command fails.
        """
        git = self.which("git")

        console.print(
            f"[cyan]Initializing git[/cyan] on branch "
            f"[green]{escape(self.initial_branch)}[/green]..."
        )
        await _run_git(
            git, "init", f"--initial-branch={self.initial_branch}",
            cwd=self.root, timeout=self.timeout,
        )
        await _run_git(git, "add", ".", cwd=self.root, timeout=self.timeout)
        await _run_git(
            git, "commit", "-m", self.commit_message,
            cwd=self.root, timeout=self.timeout,
        )
