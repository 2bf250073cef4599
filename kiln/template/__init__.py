"""Template loading, answer files and transactional execution."""

from .answers import load_answer_file, validate_used_keys, write_answer_file
from .loader import load_template, resolve_template_path
from .transaction import ExecutionResult, execute

__all__ = [
    "ExecutionResult",
    "execute",
    "load_answer_file",
    "load_template",
    "resolve_template_path",
    "validate_used_keys",
    "write_answer_file",
]
