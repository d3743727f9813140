"""Write a downloaded template into the target directory.

Copies the template tree (minus files that are regenerated or irrelevant to a
fresh project), renames dotfiles that cannot be shipped under their real name,
and patches ``package.json`` and ``.devcontainer/devcontainer.json`` with the
selected package name.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from create_scaffoldly.selection.models import OverwriteMode, Selection
from create_scaffoldly.workspace import jsonc
from create_scaffoldly.workspace.inspector import VCS_DIR

RENAME_FILES: dict[str, str] = {
    "_gitignore": ".gitignore",
}

EXCLUDED_FILES: tuple[str, ...] = (
    "README.md",
    "package.json",
    "yarn.lock",
    "package-lock.json",
    "TODO.md",
)

PACKAGE_JSON = "package.json"
DEVCONTAINER_JSON = ".devcontainer/devcontainer.json"


# ---------------------------------------------------------------------------
# Root preparation
# ---------------------------------------------------------------------------


def empty_dir(path: str | Path) -> None:
    """Remove everything inside *path* except the ``.git`` directory."""
    directory = Path(path)
    if not directory.exists():
        return
    for entry in directory.iterdir():
        if entry.name == VCS_DIR:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def prepare_root(root: str | Path, overwrite_mode: OverwriteMode | None) -> Path:
    """Make *root* ready to receive template files.

    * ``yes`` empties the directory (keeping ``.git``).
    * A missing directory is created along with its parents.
    * Otherwise the existing contents are left untouched.
    """
    root_path = Path(root)
    if overwrite_mode == OverwriteMode.YES:
        empty_dir(root_path)
    if not root_path.exists():
        root_path.mkdir(parents=True)
    return root_path


# ---------------------------------------------------------------------------
# Copying
# ---------------------------------------------------------------------------


def _target_name(name: str) -> str:
    return RENAME_FILES.get(name, name)


def copy(src: str | Path, dest: str | Path) -> None:
    """Copy a file or directory.  Symlinks are followed, not recreated."""
    if os.path.isdir(src):
        copy_tree(src, dest)
    else:
        shutil.copyfile(src, dest)


def copy_tree(src: str | Path, dest: str | Path) -> None:
    """Recursively copy *src* into *dest*, applying ``RENAME_FILES`` at every level."""
    dest_path = Path(dest)
    dest_path.mkdir(parents=True, exist_ok=True)
    for name in sorted(os.listdir(src)):
        copy(Path(src) / name, dest_path / _target_name(name))


def write_file(dest: str | Path, content: str) -> None:
    """Overwrite *dest* with *content*, creating parent directories."""
    dest_path = Path(dest)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    dest_path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------


def materialize(
    template_root: str | Path, root: str | Path, selection: Selection
) -> list[Path]:
    """Copy and patch the template at *template_root* into *root*.

    Args:
        template_root: Extracted template directory.
        root: Prepared output directory.
        selection: Answers that drive the substitutions.

    Returns:
        Paths written at the top level of *root*, in write order.
    """
    template_path = Path(template_root)
    root_path = Path(root)
    written: list[Path] = []

    for name in sorted(os.listdir(template_path)):
        if name in EXCLUDED_FILES:
            continue
        target = root_path / _target_name(name)
        copy(template_path / name, target)
        written.append(target)

    name = selection.resolved_name

    pkg = jsonc.load(template_path / PACKAGE_JSON)
    pkg["name"] = name
    pkg.pop("description", None)
    pkg.pop("license", None)
    write_file(root_path / PACKAGE_JSON, jsonc.dumps(pkg, trailing_newline=True))
    written.append(root_path / PACKAGE_JSON)

    devcontainer_src = template_path / DEVCONTAINER_JSON
    if devcontainer_src.exists():
        devcontainer = jsonc.load(devcontainer_src)
        devcontainer["name"] = name
        write_file(root_path / DEVCONTAINER_JSON, jsonc.dumps(devcontainer))
        written.append(root_path / DEVCONTAINER_JSON)

    return written
