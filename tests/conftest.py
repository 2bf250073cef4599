"""Shared fixtures for kiln tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from kiln.core.models import RunState
from kiln.settings import Settings


class ScriptedPrompter:
    """Prompter double that answers from a script and records every question."""

    def __init__(self, answers: dict[str, Any] | None = None) -> None:
        self.answers = dict(answers or {})
        self.calls: list[str] = []

    def ask(self, key: str, default: Any) -> Any:
        self.calls.append(key)
        if key not in self.answers:
            raise AssertionError(f"unexpected prompt for {key!r}")
        return self.answers[key]


@pytest.fixture
def state() -> RunState:
    return RunState()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        template_dir=tmp_path / "registry",
        scratch_prefix=f"kiln-test-{tmp_path.name}-",
    )


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """Build a template directory on disk.

    ``files`` maps template-relative paths to contents; a ``None`` value
    creates a directory.
    """

    def _make(
        files: dict[str, str | bytes | None],
        context: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        name: str = "tpl",
    ) -> Path:
        root = tmp_path / name
        tree = root / "template"
        tree.mkdir(parents=True)
        for relative, content in files.items():
            path = tree / relative
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        if context is not None:
            (root / "project.json").write_text(json.dumps(context), encoding="utf-8")
        if metadata is not None:
            (root / "__metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
        return root

    return _make


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every entry under ``root`` to its bytes (``None`` for directories)."""
    return {
        path.relative_to(root).as_posix(): None if path.is_dir() else path.read_bytes()
        for path in sorted(root.rglob("*"))
    }
