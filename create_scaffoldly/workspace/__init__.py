"""create-scaffoldly workspace module -- inspects and writes the target directory.

Quick usage::

    from create_scaffoldly.workspace import materialize, prepare_root

    root = prepare_root("my-app", selection.overwrite_mode)
    materialize(template_root, root, selection)
"""

from create_scaffoldly.workspace.inspector import VCS_DIR, exists, is_empty, list_entries
from create_scaffoldly.workspace.materializer import (
    EXCLUDED_FILES,
    RENAME_FILES,
    copy,
    copy_tree,
    empty_dir,
    materialize,
    prepare_root,
    write_file,
)

__all__ = [
    "EXCLUDED_FILES",
    "RENAME_FILES",
    "VCS_DIR",
    "copy",
    "copy_tree",
    "empty_dir",
    "exists",
    "is_empty",
    "list_entries",
    "materialize",
    "prepare_root",
    "write_file",
]
