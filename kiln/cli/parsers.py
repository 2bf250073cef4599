"""CLI argument parsers and validators."""

from __future__ import annotations

import re
from pathlib import Path

import typer

_UNIX_PATH = re.compile(r"^[\w./~\-]+$")


def parse_unix_path(value: str, argument: str) -> str:
    """Validate that ``value`` looks like a plain Unix path."""
    if not value or not _UNIX_PATH.match(value):
        raise typer.BadParameter(
            f"{argument} must be a Unix path (letters, digits, '_', '-', '.', '/', '~'), got: {value!r}"
        )
    return value


def parse_target_dir(value: str) -> Path:
    """Parse the target directory argument into an absolute path."""
    parse_unix_path(value, "target-dir")
    return Path(value).expanduser().absolute()


def parse_optional_file(value: str, option: str) -> Path | None:
    """Parse an optional file option; an empty string means not given."""
    if not value:
        return None
    parse_unix_path(value, option)
    return Path(value).expanduser().absolute()
