"""Interactive input collaborator."""

from __future__ import annotations

from typing import Any, Protocol

import click
import typer


class Prompter(Protocol):
    """Ask once for ``key`` and return a value typed like ``default``."""

    def ask(self, key: str, default: Any) -> Any: ...


class TyperPrompter:
    """Prompt on the controlling terminal using typer/click widgets."""

    def ask(self, key: str, default: Any) -> Any:
        if isinstance(default, bool):
            return typer.confirm(f"Please choose a value for {key!r}", default=default)

        if isinstance(default, list):
            choices = [str(choice) for choice in default]
            if not choices:
                return typer.prompt(f"Please choose a value for {key!r}", default="")
            answer = typer.prompt(
                f"Please choose an option for {key!r}",
                default=choices[0],
                type=click.Choice(choices),
            )
            # Hand back the original element so numbers stay numbers.
            return default[choices.index(answer)]

        value_type = type(default) if isinstance(default, (int, float)) else str
        return typer.prompt(
            f"Please choose a value for {key!r}",
            default=default,
            type=value_type,
        )
