"""create-scaffoldly selection module.

Turns CLI arguments and interactive answers into a ``Selection``.

Key classes:
    SelectionEngine  - Ordered, conditionally skipped question sequence
    RichPrompter     - Terminal prompts rendered with Rich
    Selection        - Resolved answers consumed by the rest of the pipeline
"""

from .models import OverwriteMode, Selection
from .prompter import Choice, Prompter, RichPrompter
from .slots import (
    CANCELLED_MESSAGE,
    DEFAULT_SLOTS,
    SelectionCancelled,
    SelectionEngine,
    SelectionState,
    Slot,
)

__all__ = [
    # Models
    "OverwriteMode",
    "Selection",
    # Prompting
    "Choice",
    "Prompter",
    "RichPrompter",
    # Engine
    "CANCELLED_MESSAGE",
    "DEFAULT_SLOTS",
    "SelectionCancelled",
    "SelectionEngine",
    "SelectionState",
    "Slot",
]
