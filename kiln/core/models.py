"""Domain models for templates, context layers and per-run state."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TemplateMetadata(BaseModel):
    """Identity of a template, read from its metadata file."""

    model_config = ConfigDict(extra="allow")

    tag: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tag", "Tag", "name", "Name"),
        description="Template name",
    )
    description: str | None = Field(
        default=None, validation_alias=AliasChoices("description", "Description")
    )
    repository: str | None = Field(
        default=None, validation_alias=AliasChoices("repository", "Repository")
    )
    created: str | None = Field(
        default=None, validation_alias=AliasChoices("created", "Created")
    )


class Template(BaseModel):
    """A template source tree plus its optional context and metadata."""

    root: Path = Field(..., description="Template root directory")
    tree_path: Path = Field(..., description="Directory whose contents are rendered")
    context: dict[str, Any] | None = Field(
        default=None, description="Inline defaults from the context file"
    )
    metadata: TemplateMetadata = Field(default_factory=TemplateMetadata)


class ContextLayer(BaseModel):
    """One named source of variable defaults or answers."""

    name: str
    values: dict[str, Any] = Field(default_factory=dict)


class RunState(BaseModel):
    """Accumulators for a single execution.

    ``used_keys`` records keys resolved from defaults or stored answers;
    ``user_input`` records every value the operator typed.
    """

    used_keys: set[str] = Field(default_factory=set)
    user_input: dict[str, Any] = Field(default_factory=dict)
