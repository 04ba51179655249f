"""CLI command handlers."""

from .simplify import simplify_command

__all__ = ['simplify_command']
