"""Render a template into scratch space, then commit it to the target."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..binding import Prompter, TyperPrompter, bind
from ..core.errors import CommitError, ConfigurationError
from ..core.models import ContextLayer, RunState, Template
from ..registry.functions import FunctionRegistry
from ..rendering import engine
from ..rendering.io import copy_tree
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ExecutionResult(BaseModel):
    """Outcome of a committed template execution."""

    target: Path
    files: list[Path] = Field(default_factory=list)
    state: RunState


def build_layers(template: Template, answers: dict[str, Any] | None) -> list[ContextLayer]:
    """Context layers in binding order: inline defaults, then stored answers."""
    return [
        ContextLayer(name="defaults", values=template.context or {}),
        ContextLayer(name="stored", values=answers or {}),
    ]


def execute(
    template: Template,
    target_dir: Path,
    *,
    answers: dict[str, Any] | None = None,
    use_defaults_only: bool = False,
    prompter: Prompter | None = None,
    state: RunState | None = None,
    settings: Settings | None = None,
) -> ExecutionResult:
    """Execute ``template`` into ``target_dir`` with all-or-nothing semantics.

    The tree is rendered into a temporary directory that is removed on every
    exit path. The target is only touched once rendering has fully succeeded.
    The final recursive copy is not atomic: a failure there raises
    ``CommitError`` and may leave the target partially populated.

    Args:
        template: Loaded template
        target_dir: Directory that receives the rendered tree
        answers: Stored answers that override inline defaults by key
        use_defaults_only: Resolve every variable without prompting
        prompter: Input collaborator (terminal prompts by default)
        state: Per-run accumulators; a fresh one is created if omitted
        settings: Runtime configuration

    Returns:
        Execution result with the written files and the run state
    """
    settings = settings or get_settings()
    state = state if state is not None else RunState()
    target_dir = Path(target_dir).absolute()

    parent = target_dir.parent
    if not parent.is_dir():
        raise ConfigurationError(f"parent directory {str(parent)!r} doesn't exist")

    registry = bind(
        build_layers(template, answers),
        FunctionRegistry.with_helpers(),
        use_defaults_only=use_defaults_only,
        prompter=prompter or TyperPrompter(),
        state=state,
    )

    with tempfile.TemporaryDirectory(prefix=settings.scratch_prefix) as scratch:
        scratch_dir = Path(scratch)
        logger.debug(f"Staging rendered output in {scratch_dir}")

        files = engine.render_tree(
            template.tree_path,
            scratch_dir,
            registry,
            dir_mode=settings.dir_mode,
            announce=not use_defaults_only,
        )

        try:
            copy_tree(scratch_dir, target_dir)
        except OSError as exc:
            raise CommitError(target_dir, str(exc)) from exc

    logger.debug(f"Committed {len(files)} file(s) to {target_dir}")
    return ExecutionResult(target=target_dir, files=files, state=state)
