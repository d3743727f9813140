"""Read-only queries about the target directory."""

from __future__ import annotations

import os
from pathlib import Path

VCS_DIR = ".git"


def exists(path: str | Path) -> bool:
    return Path(path).exists()


def list_entries(path: str | Path) -> list[str]:
    """Sorted names of the entries directly inside *path*."""
    return sorted(os.listdir(path))


def is_empty(path: str | Path) -> bool:
    """Return ``True`` if *path* has no entries other than a ``.git`` directory."""
    entries = os.listdir(path)
    return len(entries) == 0 or (len(entries) == 1 and entries[0] == VCS_DIR)
