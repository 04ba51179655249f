"""Script AST types and rendering."""

from .types import (
    Backticked,
    BashIf,
    BashString,
    Command,
    Comment,
    CompOp,
    Comparison,
    DoubleQuoted,
    Else,
    Field,
    Function,
    If,
    IfBlock,
    Other,
    Script,
    SingleQuoted,
    Unquoted,
    Variable,
    to_string,
)
from .render import render_script

__all__ = [
    'Backticked',
    'BashIf',
    'BashString',
    'Command',
    'Comment',
    'CompOp',
    'Comparison',
    'DoubleQuoted',
    'Else',
    'Field',
    'Function',
    'If',
    'IfBlock',
    'Other',
    'Script',
    'SingleQuoted',
    'Unquoted',
    'Variable',
    'to_string',
    'render_script',
]
