"""Ordered, conditionally skipped question sequence.

The engine walks a list of ``Slot`` descriptors.  Each slot decides from the
answers so far (and the CLI arguments) whether it is asked, how its choices
and initial value are built, and how its answer is validated.  A slot that is
skipped contributes no answer; ``SelectionEngine._build`` fills the gap from
the CLI arguments or the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from create_scaffoldly.catalog import FRAMEWORKS, Framework, resolve_template
from create_scaffoldly.naming import (
    format_target_dir,
    is_valid_package_name,
    project_name_for,
    to_valid_package_name,
)
from create_scaffoldly.selection.models import OverwriteMode, Selection
from create_scaffoldly.selection.prompter import Choice, Prompter
from create_scaffoldly.workspace import inspector

CANCELLED_MESSAGE = "✖ Operation cancelled"


class SelectionCancelled(Exception):
    """Raised when the user cancels the question sequence."""

    def __init__(self, message: str = CANCELLED_MESSAGE) -> None:
        super().__init__(message)


@dataclass
class SelectionState:
    """Everything a slot may look at while the sequence runs."""

    cwd: Path
    default_target_dir: str
    frameworks: tuple[Framework, ...]
    arg_target_dir: str = ""
    arg_template: str | None = None
    arg_overwrite: OverwriteMode | None = None
    target_dir: str = ""
    answers: dict[str, Any] = field(default_factory=dict)

    @property
    def project_name(self) -> str:
        return project_name_for(self.target_dir, self.cwd)

    @property
    def target_path(self) -> Path:
        return self.cwd / self.target_dir

    @property
    def template_match(self) -> tuple[Framework, str] | None:
        if not self.arg_template:
            return None
        return resolve_template(self.arg_template, self.frameworks)

    @property
    def framework(self) -> Framework | None:
        """Framework answered in the framework slot, or implied by ``--template``."""
        if "framework" in self.answers:
            return self.answers["framework"]
        match = self.template_match
        return match[0] if match else None


@dataclass
class Slot:
    """Descriptor for one question."""

    name: str
    kind: str  # "text" or "select"
    should_ask: Callable[[SelectionState], bool]
    message: Callable[[SelectionState], str]
    choices: Callable[[SelectionState], list[Choice]] | None = None
    initial: Callable[[SelectionState], Any] | None = None
    validate: Callable[[str], "bool | str"] | None = None
    on_state: Callable[[SelectionState, str], None] | None = None
    preset: Callable[[SelectionState], Any] | None = None
    after: Callable[[SelectionState], None] | None = None


# ---------------------------------------------------------------------------
# Slot definitions
# ---------------------------------------------------------------------------


def _update_target_dir(state: SelectionState, value: str) -> None:
    state.target_dir = format_target_dir(value) or state.default_target_dir


def _needs_overwrite_answer(state: SelectionState) -> bool:
    path = state.target_path
    return inspector.exists(path) and not inspector.is_empty(path)


def _overwrite_message(state: SelectionState) -> str:
    where = (
        "Current directory"
        if state.target_dir == "."
        else f'Target directory "{state.target_dir}"'
    )
    return f"{where} is not empty. Please choose how to proceed:"


def _check_overwrite(state: SelectionState) -> None:
    if state.answers.get("overwrite") == OverwriteMode.NO:
        raise SelectionCancelled()


def _validate_package_name(value: str) -> bool | str:
    return is_valid_package_name(value) or "Invalid package.json name"


def _framework_message(state: SelectionState) -> str:
    if state.arg_template and state.template_match is None:
        return f'"{state.arg_template}" isn\'t a valid template. Please choose from below: '
    return "Select a framework:"


def _framework_choices(state: SelectionState) -> list[Choice]:
    return [
        Choice(title=framework.title, value=framework, style=framework.color)
        for framework in state.frameworks
    ]


def _needs_variant(state: SelectionState) -> bool:
    if "framework" not in state.answers:
        # Framework came from --template, which already names the branch.
        return False
    framework = state.framework
    return framework is not None and len(framework.variants) > 0


def _variant_choices(state: SelectionState) -> list[Choice]:
    framework = state.framework
    assert framework is not None
    return [
        Choice(title=variant.title, value=variant.branch, style=variant.color)
        for variant in framework.variants
    ]


DEFAULT_SLOTS: tuple[Slot, ...] = (
    Slot(
        name="project_name",
        kind="text",
        should_ask=lambda state: not state.arg_target_dir,
        message=lambda state: "Project name:",
        initial=lambda state: state.default_target_dir,
        on_state=_update_target_dir,
    ),
    Slot(
        name="overwrite",
        kind="select",
        should_ask=_needs_overwrite_answer,
        message=_overwrite_message,
        choices=lambda state: [
            Choice("Remove existing files and continue", OverwriteMode.YES),
            Choice("Cancel operation", OverwriteMode.NO),
            Choice("Ignore files and continue", OverwriteMode.IGNORE),
        ],
        initial=lambda state: 0,
        preset=lambda state: state.arg_overwrite,
        after=_check_overwrite,
    ),
    Slot(
        name="package_name",
        kind="text",
        should_ask=lambda state: not is_valid_package_name(state.project_name),
        message=lambda state: "Package name:",
        initial=lambda state: to_valid_package_name(state.project_name),
        validate=_validate_package_name,
    ),
    Slot(
        name="framework",
        kind="select",
        should_ask=lambda state: state.template_match is None,
        message=_framework_message,
        choices=_framework_choices,
        initial=lambda state: 0,
    ),
    Slot(
        name="variant",
        kind="select",
        should_ask=_needs_variant,
        message=lambda state: "Select a variant:",
        choices=_variant_choices,
        initial=lambda state: 0,
    ),
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class SelectionEngine:
    """Runs the slot sequence against a ``Prompter`` and builds a ``Selection``."""

    def __init__(
        self,
        prompter: Prompter,
        frameworks: tuple[Framework, ...] = FRAMEWORKS,
        cwd: str | Path | None = None,
        default_target_dir: str = "my-app",
        slots: tuple[Slot, ...] = DEFAULT_SLOTS,
    ) -> None:
        self.prompter = prompter
        self.frameworks = frameworks
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.default_target_dir = default_target_dir
        self.slots = slots

    def run(
        self,
        target_dir: str | None = None,
        template: str | None = None,
        overwrite: OverwriteMode | str | None = None,
    ) -> Selection:
        """Ask every applicable question.

        Args:
            target_dir: Positional directory argument, if any.
            template: ``--template`` value, if any.  Unknown names fall back to
                the interactive framework prompt.
            overwrite: ``--overwrite`` value; answers the overwrite question
                without prompting.

        Returns:
            The resolved ``Selection``.

        Raises:
            SelectionCancelled: The user chose "Cancel operation" or aborted.
        """
        arg_target_dir = format_target_dir(target_dir)
        state = SelectionState(
            cwd=self.cwd,
            default_target_dir=self.default_target_dir,
            frameworks=self.frameworks,
            arg_target_dir=arg_target_dir,
            arg_template=template or None,
            arg_overwrite=OverwriteMode(overwrite) if overwrite else None,
            target_dir=arg_target_dir or self.default_target_dir,
        )

        try:
            for slot in self.slots:
                if slot.should_ask(state):
                    state.answers[slot.name] = self._answer(slot, state)
                if slot.after is not None:
                    slot.after(state)
        except (KeyboardInterrupt, EOFError) as exc:
            raise SelectionCancelled() from exc

        return self._build(state)

    def _answer(self, slot: Slot, state: SelectionState) -> Any:
        if slot.preset is not None:
            preset = slot.preset(state)
            if preset is not None:
                return preset

        message = slot.message(state)
        initial = slot.initial(state) if slot.initial is not None else None

        if slot.kind == "select":
            choices = slot.choices(state) if slot.choices is not None else []
            return self.prompter.select(message, choices, initial or 0)

        on_state = None
        if slot.on_state is not None:
            hook = slot.on_state

            def on_state(value: str) -> None:
                hook(state, value)

        value = self.prompter.text(
            message,
            initial=initial or "",
            validate=slot.validate,
            on_state=on_state,
        )
        if on_state is not None:
            on_state(value)
        return value

    def _build(self, state: SelectionState) -> Selection:
        framework = state.framework
        if framework is None:
            raise ValueError("Framework could not be resolved from the answers")

        if "variant" in state.answers:
            branch = state.answers["variant"]
        elif state.template_match is not None and state.template_match[0] == framework:
            branch = state.template_match[1]
        else:
            branch = framework.default_branch

        if framework.variants and framework.get_variant(branch) is None:
            raise ValueError(f"Branch '{branch}' is not a variant of {framework.repo}")

        return Selection(
            project_name=state.project_name,
            target_dir=state.target_dir,
            package_name=state.answers.get("package_name"),
            framework=framework,
            variant_branch=branch,
            overwrite_mode=state.answers.get("overwrite"),
        )
