"""Project and package name helpers.

Pure functions that turn a raw directory argument into a target directory and
derive an npm-compatible package name from it.
"""

from __future__ import annotations

import re
from pathlib import Path

PACKAGE_NAME_RE = re.compile(
    r"^(?:@[a-z0-9\-*~][a-z0-9\-._~]*/)?[a-z0-9\-~][a-z0-9\-._~]*$"
)


def format_target_dir(target_dir: str | None) -> str:
    """Trim whitespace and strip every trailing ``/``.

    Examples::

        format_target_dir("  my-app/// ") -> "my-app"
        format_target_dir(None) -> ""
    """
    if not target_dir:
        return ""
    return re.sub(r"[\s/]+$", "", target_dir.strip())


def is_valid_package_name(name: str) -> bool:
    """Return ``True`` if *name* is usable as a ``package.json`` name."""
    return PACKAGE_NAME_RE.fullmatch(name) is not None


def to_valid_package_name(name: str) -> str:
    """Coerce an arbitrary project name into a valid package name.

    * Trims and lowercases the input.
    * Replaces whitespace runs with a hyphen.
    * Drops a single leading ``.`` or ``_``.
    * Replaces every run of other disallowed characters with a hyphen.

    Examples::

        to_valid_package_name("My App") -> "my-app"
        to_valid_package_name("_Private.Lib") -> "private-lib"
    """
    result = name.strip().lower()
    result = re.sub(r"\s+", "-", result)
    result = re.sub(r"^[._]", "", result)
    return re.sub(r"[^a-z0-9\-~]+", "-", result)


def project_name_for(target_dir: str, cwd: str | Path) -> str:
    """Return the project name implied by *target_dir*.

    ``"."`` means "scaffold into the current directory", so the directory's
    own name is used.
    """
    if target_dir == ".":
        return Path(cwd).resolve().name
    return target_dir
