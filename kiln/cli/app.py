"""Main CLI application."""

from __future__ import annotations

import logging

import typer
from typing_extensions import Annotated

from ..core.errors import KilnError
from ..settings import get_settings
from ..template import answers as answer_files
from ..template import loader, transaction
from .parsers import parse_optional_file, parse_target_dir, parse_unix_path

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="kiln",
    help="Scaffold projects from Jinja2 template directories.",
)


@app.callback()
def _root() -> None:
    """Scaffold projects from Jinja2 template directories."""


@app.command()
def use(
    template_tag: Annotated[
        str,
        typer.Argument(help="Template name in the template directory, or a path."),
    ],
    target_dir: Annotated[
        str,
        typer.Argument(help="Directory to render the project into."),
    ],
    use_defaults: Annotated[
        bool,
        typer.Option(
            "--use-defaults",
            help="Use default values from the template instead of prompting.",
        ),
    ] = False,
    use_file: Annotated[
        str,
        typer.Option(
            "--use-file",
            help="JSON answer file overriding template defaults (implies --use-defaults).",
            metavar="PATH",
        ),
    ] = "",
    json_file: Annotated[
        str,
        typer.Option(
            "--json-file",
            help="Write the values entered at prompts to this JSON file.",
            metavar="PATH",
        ),
    ] = "",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Execute a project template in the given directory."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting kiln")

    parse_unix_path(template_tag, "template-tag")
    target = parse_target_dir(target_dir)
    answer_path = parse_optional_file(use_file, "--use-file")
    output_path = parse_optional_file(json_file, "--json-file")
    settings = get_settings()

    try:
        template = loader.load_template(
            loader.resolve_template_path(template_tag, settings)
        )

        stored = None
        if answer_path is not None:
            stored = answer_files.load_answer_file(answer_path)
            use_defaults = True

        result = transaction.execute(
            template,
            target,
            answers=stored,
            use_defaults_only=use_defaults,
            settings=settings,
        )

        if output_path is not None:
            answer_files.write_answer_file(
                output_path, result.state.user_input, mode=settings.answer_file_mode
            )

        if answer_path is not None:
            answer_files.validate_used_keys(answer_path, stored or {}, result.state)
    except KilnError as exc:
        logger.error(f"use: {exc}")
        raise typer.Exit(code=1) from exc

    logger.info(f"Successfully executed the project template {template_tag} in {target}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
