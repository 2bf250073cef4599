"""Answer files: stored answers in, collected user input out."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..core.errors import AnswerValidationError, ConfigurationError
from ..core.models import RunState
from ..rendering.io import atomic_write_text
from .loader import read_json_object

logger = logging.getLogger(__name__)


def load_answer_file(path: Path) -> dict[str, Any]:
    """Load an explicitly supplied answer file.

    Unlike the template's own context file, a missing answer file is an error.
    """
    if not path.is_file():
        raise ConfigurationError(f"answer file not found: {path}")
    answers = read_json_object(path)
    logger.debug(f"Loaded {len(answers)} stored answer(s) from {path}")
    return answers


def write_answer_file(path: Path, user_input: dict[str, Any], mode: int = 0o644) -> None:
    """Persist values typed during this run so they can seed a later run."""
    text = json.dumps(user_input, indent=2, default=str)
    try:
        atomic_write_text(path, text, mode=mode)
    except OSError as exc:
        raise ConfigurationError(f"could not write answer file {path}: {exc}") from exc
    logger.info(f"Saved {len(user_input)} answer(s) to {path}")


def validate_used_keys(answer_file: Path, answers: dict[str, Any], state: RunState) -> None:
    """Check that every key used while rendering is defined in the answer file.

    Raises:
        AnswerValidationError: listing every missing key
    """
    missing = [key for key in state.used_keys if key not in answers]
    for key in sorted(missing):
        logger.error(
            f"Value for key {key!r} came from the template defaults. "
            f"Please define the key and value in {answer_file}"
        )
    if missing:
        raise AnswerValidationError(answer_file, missing)
