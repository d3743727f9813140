"""Shared pytest fixtures for the create-scaffoldly test suite.

Provides reusable fixtures for:
- Template directories shaped like an extracted archive
- In-memory zip archives of a template branch
- A scripted prompter that replays answers instead of reading the terminal
- Mock subprocess helpers
"""

from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path
from typing import Any, Callable, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_scaffoldly.selection.prompter import Choice


# ---------------------------------------------------------------------------
# Template fixtures
# ---------------------------------------------------------------------------

DEVCONTAINER_JSONC = """\
{
  // Scaffoldly devcontainer
  "name": "tpl",
  "image": "mcr.microsoft.com/devcontainers/typescript-node:18",
  /* forwarded ports */
  "forwardPorts": [3000,],
}
"""


def build_template(root: Path, extra: dict[str, str] | None = None) -> Path:
    """Write a representative template tree under *root* and return it."""
    files: dict[str, str] = {
        "package.json": json.dumps(
            {"name": "tpl", "description": "x", "license": "MIT", "version": "1.0.0"}
        ),
        "a.txt": "hello\n",
        "_gitignore": "node_modules\n",
        "README.md": "# template\n",
        "yarn.lock": "# lock\n",
        "package-lock.json": "{}",
        "TODO.md": "- todo\n",
        ".devcontainer/devcontainer.json": DEVCONTAINER_JSONC,
        "src/index.ts": "export {};\n",
        "src/_gitignore": "dist\n",
    }
    files.update(extra or {})
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """An extracted template directory named like ``{repo}-{branch}``."""
    root = tmp_path / "scratch" / "stack-aws-serverless-express-react-vite"
    root.mkdir(parents=True)
    return build_template(root)


@pytest.fixture
def zip_bytes() -> Callable[..., bytes]:
    """Factory building a zip archive whose single root is ``{repo}-{branch}``.

    Usage:
        def test_fetch(zip_bytes):
            payload = zip_bytes("repo-branch", {"a.txt": "hi"})
    """

    def factory(root_name: str, files: dict[str, str] | None = None) -> bytes:
        buffer = io.BytesIO()
        entries = files if files is not None else {
            "package.json": json.dumps({"name": "tpl"}),
            "a.txt": "hello\n",
        }
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr(f"{root_name}/", "")
            for rel, content in entries.items():
                archive.writestr(f"{root_name}/{rel}", content)
        return buffer.getvalue()

    return factory


# ---------------------------------------------------------------------------
# Scripted prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """``Prompter`` that replays a fixed list of answers.

    An answer that is an exception instance is raised instead of returned,
    which is how tests simulate Ctrl+C.  Every prompt is recorded in
    ``asked`` as ``(kind, message)``; validation errors go to ``errors``.
    """

    def __init__(self, answers: Sequence[Any] = ()) -> None:
        self.answers = list(answers)
        self.asked: list[tuple[str, str]] = []
        self.initials: list[Any] = []
        self.choices: list[list[Choice]] = []
        self.errors: list[str] = []

    def _next(self) -> Any:
        if not self.answers:
            raise AssertionError("Prompter ran out of scripted answers")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def text(self, message, initial="", validate=None, on_state=None):
        self.asked.append(("text", message))
        self.initials.append(initial)
        while True:
            value = self._next()
            if on_state is not None:
                on_state(value)
            if validate is None:
                return value
            outcome = validate(value)
            if outcome is True:
                return value
            self.errors.append(outcome)

    def select(self, message, choices, initial=0):
        self.asked.append(("select", message))
        self.initials.append(initial)
        self.choices.append(list(choices))
        answer = self._next()
        values = [choice.value for choice in choices]
        assert answer in values, f"{answer!r} is not one of {values!r}"
        return answer

    @property
    def asked_messages(self) -> list[str]:
        return [message for _, message in self.asked]


@pytest.fixture
def scripted_prompter() -> Callable[..., ScriptedPrompter]:
    """Factory for ``ScriptedPrompter`` instances."""

    def factory(*answers: Any) -> ScriptedPrompter:
        return ScriptedPrompter(answers)

    return factory


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
