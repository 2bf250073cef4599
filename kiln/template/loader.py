"""Locate templates and read their context and metadata files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..core.errors import ConfigurationError
from ..core.models import Template, TemplateMetadata
from ..settings import (
    CONTEXT_FILE_NAME,
    METADATA_FILE_NAME,
    TEMPLATE_DIR_NAME,
    Settings,
)

logger = logging.getLogger(__name__)


def read_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON file whose top level must be an object."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"could not read {path}: {exc.strerror or exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"could not parse {path} as JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must contain a JSON object, got {type(data).__name__}"
        )
    return data


def resolve_template_path(tag: str, settings: Settings) -> Path:
    """Resolve a template tag to a directory.

    An existing directory path is used as is; anything else is looked up by
    name under the configured template directory.
    """
    candidate = Path(tag).expanduser()
    if candidate.is_dir():
        return candidate.resolve()

    registered = settings.template_dir / tag
    if registered.is_dir():
        return registered.resolve()

    raise ConfigurationError(
        f"Template {tag!r} couldn't be found in the template registry "
        f"({settings.template_dir})"
    )


def load_template(path: Path) -> Template:
    """Load a template from its root directory.

    A missing context file means the template has no defaults; a missing
    metadata file yields empty metadata.

    Args:
        path: Template root directory

    Returns:
        Loaded template
    """
    root = path.resolve()
    tree_path = root / TEMPLATE_DIR_NAME
    if not tree_path.is_dir():
        raise ConfigurationError(f"template directory not found: {tree_path}")

    context_file = root / CONTEXT_FILE_NAME
    context = read_json_object(context_file) if context_file.exists() else None
    if context is None:
        logger.debug(f"No context file at {context_file}")

    metadata = TemplateMetadata()
    metadata_file = root / METADATA_FILE_NAME
    if metadata_file.exists():
        try:
            metadata = TemplateMetadata.model_validate(read_json_object(metadata_file))
        except ValidationError as exc:
            raise ConfigurationError(f"invalid metadata in {metadata_file}: {exc}") from exc

    logger.debug(f"Loaded template {metadata.tag or root.name} from {root}")
    return Template(root=root, tree_path=tree_path, context=context, metadata=metadata)
