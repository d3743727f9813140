"""Shared utility functions for create-scaffoldly.

Provides external command lookup and Rich-based console output.  The
module-level ``console`` is the single output surface used by every other
module.
"""

from __future__ import annotations

import shutil

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console()


# ---------------------------------------------------------------------------
# External command lookup
# ---------------------------------------------------------------------------


class CommandNotFoundError(Exception):
    """Raised when a required executable cannot be located on ``PATH``."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unable to locate the `{command}` command on this system.")


def resolve_command(name: str) -> str:
    """Resolve an executable name to an absolute path.

    Raises:
        CommandNotFoundError: If *name* is not on ``PATH``.
    """
    resolved = shutil.which(name)
    if resolved is None:
        raise CommandNotFoundError(name)
    return resolved


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a progress line for a pipeline step."""
    console.print(f"[cyan]{message}[/cyan]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_instructions(lines: list[str], title: str = "Next steps") -> None:
    """Render next-step guidance inside a panel.

    Lines are printed verbatim (no markup interpretation) so that paths with
    square brackets survive.
    """
    body = "\n".join(lines)
    console.print(Panel(Text(body), title=title, border_style="green"))
