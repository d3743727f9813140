"""Comment-tolerant JSON ("JSONC") reading and writing.

Template files such as ``devcontainer.json`` contain ``//`` and ``/* */``
comments and trailing commas, which ``json.loads`` rejects.  ``strip_comments``
removes them with a small scanner that tracks string literals, so values like
``"https://example.com"`` are left intact.

Comments are not carried through a load/dump cycle.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def strip_comments(text: str) -> str:
    """Remove comments and trailing commas from JSONC *text*.

    Line comments keep their terminating newline and block comments are
    replaced by a single space, so line numbers in later parse errors still
    point at the original line.
    """
    out: list[str] = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = length if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise json.JSONDecodeError("Unterminated block comment", text, i)
            out.append(" " + "\n" * text.count("\n", i, end))
            i = end + 2
        else:
            out.append(ch)
            i += 1

    return _strip_trailing_commas("".join(out))


def _strip_trailing_commas(text: str) -> str:
    """Drop commas that are followed only by whitespace and ``}`` or ``]``."""
    out: list[str] = []
    in_string = False
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch == ",":
            j = i + 1
            while j < length and text[j] in " \t\r\n":
                j += 1
            if j >= length or text[j] not in "}]":
                out.append(ch)
        else:
            out.append(ch)
        i += 1

    return "".join(out)


def loads(text: str) -> Any:
    """Parse JSONC text."""
    return json.loads(strip_comments(text))


def load(path: str | Path) -> Any:
    """Read and parse a JSONC file."""
    return loads(Path(path).read_text(encoding="utf-8"))


def dumps(data: Any, trailing_newline: bool = False) -> str:
    """Serialise *data* with 2-space indentation."""
    content = json.dumps(data, indent=2, ensure_ascii=False)
    return content + "\n" if trailing_newline else content
