"""Kiln - template-driven project scaffolder.

Renders a directory of Jinja2 templates, names and contents alike, into a
project tree using values from defaults, answer files or interactive prompts.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
