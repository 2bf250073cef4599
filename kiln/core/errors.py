"""Error taxonomy for template execution."""

from __future__ import annotations

from pathlib import Path


class KilnError(Exception):
    """Base class for every failure surfaced to the operator."""


class ConfigurationError(KilnError):
    """Raised for missing templates, malformed context files or bad targets."""


class RenderError(KilnError):
    """Raised when a name or content template fails to render."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class AnswerValidationError(KilnError):
    """Raised when an answer file lacks keys that were used while rendering."""

    def __init__(self, answer_file: Path, missing_keys: list[str]) -> None:
        self.answer_file = answer_file
        self.missing_keys = sorted(missing_keys)
        super().__init__(
            f"Missing values in {answer_file} for key(s): "
            f"{', '.join(self.missing_keys)}. Please review the file."
        )


class CommitError(KilnError):
    """Raised when copying the scratch tree into the target fails.

    The target directory may be partially populated at this point.
    """

    def __init__(self, target: Path, message: str) -> None:
        self.target = target
        super().__init__(f"failed to populate {target}: {message}")
