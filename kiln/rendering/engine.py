"""Template rendering engine."""

from __future__ import annotations

import logging
import stat
from collections import ChainMap
from collections.abc import Iterator
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from ..core.errors import RenderError
from ..registry.functions import FunctionRegistry
from ..registry.lazy import unwrap, unwrapping
from .io import atomic_write_bytes, is_only_whitespace, make_dir

logger = logging.getLogger(__name__)

_LOOKUP_TESTS = frozenset({"defined", "undefined"})


def create_environment() -> Environment:
    """Create the Jinja2 environment shared by name and content templates.

    Undefined names are fatal rather than rendered as empty strings. Bound
    variables arrive as lazy values; output, filters and tests see them
    resolved.
    """
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        finalize=unwrap,
    )
    env.filters = {name: unwrapping(fn) for name, fn in env.filters.items()}
    # Checking whether a name is bound must not resolve it.
    env.tests = {
        name: fn if name in _LOOKUP_TESTS else unwrapping(fn)
        for name, fn in env.tests.items()
    }
    return env


def has_template_syntax(env: Environment, text: str) -> bool:
    """Return True when ``text`` contains any Jinja2 delimiter."""
    return any(
        marker in text
        for marker in (
            env.variable_start_string,
            env.block_start_string,
            env.comment_start_string,
        )
    )


def render_text(env: Environment, source: str, registry: FunctionRegistry) -> str:
    """Render a template string against the registry.

    The registry is handed to Jinja2 without being copied into a dict, and
    bound variables are only resolved (and prompted for) when the rendering
    actually uses them, so a variable inside a branch that is not taken is
    never asked for.

    Args:
        env: Jinja2 environment
        source: Template source text
        registry: Function registry backing the template context

    Returns:
        Rendered text
    """
    template = env.from_string(source)
    context = template.new_context(ChainMap(registry.view(), env.globals), shared=True)
    try:
        return env.concat(template.root_render_func(context))  # type: ignore[attr-defined]
    except Exception:
        return env.handle_exception()


def render_name(env: Environment, relative: Path, registry: FunctionRegistry) -> Path:
    """Render a template-relative path into a destination-relative path."""
    text = relative.as_posix()
    if not has_template_syntax(env, text):
        return relative
    try:
        return Path(render_text(env, text, registry))
    except (TemplateError, TypeError, ValueError) as exc:
        raise RenderError(relative, f"cannot render file name: {exc}") from exc


def render_file(
    env: Environment, source: Path, relative: Path, registry: FunctionRegistry
) -> bytes:
    """Render a file body.

    Bodies without template syntax, or that are not UTF-8, pass through
    byte-for-byte.
    """
    data = source.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Copying binary file verbatim: {relative}")
        return data

    if not has_template_syntax(env, text):
        return data

    try:
        return render_text(env, text, registry).encode("utf-8")
    except (TemplateError, TypeError, ValueError) as exc:
        raise RenderError(relative, f"cannot render file contents: {exc}") from exc


def walk(root: Path) -> Iterator[Path]:
    """Yield every entry under ``root`` depth-first, directories before children.

    Siblings are visited in sorted order so prompts are asked in a stable
    sequence between runs.
    """
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        yield entry
        if entry.is_dir() and not entry.is_symlink():
            yield from walk(entry)


def render_tree(
    template_root: Path,
    dest_root: Path,
    registry: FunctionRegistry,
    *,
    dir_mode: int = 0o755,
    announce: bool = False,
) -> list[Path]:
    """Render every entry of ``template_root`` into ``dest_root``.

    Path names and file bodies both go through the template engine. Files
    that render to whitespace only are not written. The registry is frozen
    for the duration of the walk.

    Args:
        template_root: Directory holding the template tree
        dest_root: Existing directory that receives the rendered tree
        registry: Populated function registry
        dir_mode: Permissions for created directories
        announce: Log each created file at info level instead of debug

    Returns:
        Destination-relative paths of the files written
    """
    env = create_environment()
    registry.freeze()
    written: list[Path] = []

    logger.debug(f"Rendering template tree {template_root} into {dest_root}")

    for entry in walk(template_root):
        relative = entry.relative_to(template_root)
        new_name = render_name(env, relative, registry)
        target = dest_root / new_name

        if entry.is_dir():
            try:
                make_dir(target, mode=dir_mode)
            except OSError as exc:
                raise RenderError(relative, f"cannot create directory {target}: {exc}") from exc
            continue

        rendered = render_file(env, entry, relative, registry)

        if is_only_whitespace(rendered):
            try:
                target.unlink(missing_ok=True)
            except OSError as exc:
                raise RenderError(relative, f"cannot remove {target}: {exc}") from exc
            logger.debug(f"Skipped {new_name}: rendered to whitespace only")
            continue

        file_mode = stat.S_IMODE(entry.stat().st_mode)
        try:
            atomic_write_bytes(target, rendered, mode=file_mode)
        except OSError as exc:
            raise RenderError(relative, f"cannot write {target}: {exc}") from exc
        written.append(new_name)

        logger.log(logging.INFO if announce else logging.DEBUG, f"Created {new_name}")

    logger.info(f"Rendered {len(written)} file(s)")
    return written
