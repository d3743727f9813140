"""Terminal prompts backed by Rich.

The selection engine only talks to the ``Prompter`` protocol, so tests can
drive it with scripted answers while the CLI uses ``RichPrompter``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from create_scaffoldly.utils import console as default_console

Validator = Callable[[str], "bool | str"]


@dataclass(frozen=True)
class Choice:
    """One entry of a select prompt."""

    title: str
    value: Any
    style: str = ""


class Prompter(Protocol):
    """Capability that yields validated answers.

    Implementations raise ``KeyboardInterrupt`` or ``EOFError`` when the user
    aborts; the selection engine turns either into a cancellation.
    """

    def text(
        self,
        message: str,
        initial: str = "",
        validate: Validator | None = None,
        on_state: Callable[[str], None] | None = None,
    ) -> str: ...

    def select(self, message: str, choices: Sequence[Choice], initial: int = 0) -> Any: ...


class RichPrompter:
    """``Prompter`` implementation using ``rich.prompt``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def text(
        self,
        message: str,
        initial: str = "",
        validate: Validator | None = None,
        on_state: Callable[[str], None] | None = None,
    ) -> str:
        while True:
            value = Prompt.ask(
                f"[bold]{escape(message)}[/bold]",
                default=initial or None,
                console=self.console,
            )
            value = value or ""
            if on_state is not None:
                on_state(value)
            if validate is None:
                return value
            outcome = validate(value)
            if outcome is True:
                return value
            error = outcome if isinstance(outcome, str) else "Invalid value"
            self.console.print(f"[red]✖ {escape(error)}[/red]")

    def select(self, message: str, choices: Sequence[Choice], initial: int = 0) -> Any:
        if not choices:
            raise ValueError(f"No choices available for prompt: {message}")

        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="right")
        table.add_column()
        for index, choice in enumerate(choices, start=1):
            title = escape(choice.title)
            if choice.style:
                title = f"[{choice.style}]{title}[/{choice.style}]"
            table.add_row(str(index), title)

        self.console.print(f"[bold]{escape(message)}[/bold]")
        self.console.print(table)
        picked = IntPrompt.ask(
            "Enter number",
            choices=[str(i) for i in range(1, len(choices) + 1)],
            default=initial + 1,
            show_choices=False,
            console=self.console,
        )
        return choices[picked - 1].value
