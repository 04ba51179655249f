"""
Script AST type definitions.

A script is an ordered list of fields. Order matters: it is the order in
which assignments happen and conditionals are reached.
"""

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Union


# Quoting variants

@dataclass(frozen=True)
class SingleQuoted:
    """'text' - never expanded."""
    text: str


@dataclass(frozen=True)
class DoubleQuoted:
    """"text" - variable references inside are expanded."""
    text: str


@dataclass(frozen=True)
class Unquoted:
    """Bare word, expanded like a double-quoted string."""
    text: str


@dataclass(frozen=True)
class Backticked:
    """`command` - a nested field standing for a subshell. Never executed."""
    field: 'Field'


BashString = Union[SingleQuoted, DoubleQuoted, Unquoted, Backticked]


# Fields

@dataclass(frozen=True)
class Function:
    """Function definition: name() { body }."""
    name: str
    body: List['Field'] = field(default_factory=list)


@dataclass(frozen=True)
class Command:
    """Simple command invocation with its arguments."""
    name: str
    args: List[BashString] = field(default_factory=list)


@dataclass(frozen=True)
class Variable:
    """Assignment of one or more segments to a variable name."""
    name: str
    value: List[BashString] = field(default_factory=list)


@dataclass(frozen=True)
class IfBlock:
    """if/elif/else construct."""
    chain: 'BashIf'


@dataclass(frozen=True)
class Comment:
    """A '# ...' line."""
    text: str


@dataclass(frozen=True)
class Other:
    """Any statement the simplifier does not look into."""
    text: str


Field = Union[Function, Command, Variable, IfBlock, Comment, Other]
Script = List[Field]


# Conditionals

class CompOp(str, Enum):
    """String comparison operators usable in a test."""
    EQ = "=="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    @property
    def func(self) -> Callable[[str, str], bool]:
        return _OPERATORS[self]


_OPERATORS = {
    CompOp.EQ: operator.eq,
    CompOp.NE: operator.ne,
    CompOp.GT: operator.gt,
    CompOp.GE: operator.ge,
    CompOp.LT: operator.lt,
    CompOp.LE: operator.le,
}


@dataclass(frozen=True)
class Comparison:
    """Binary string test, e.g. [ "$x" == "1" ]."""
    op: CompOp
    left: BashString
    right: BashString

    def holds(self) -> bool:
        """Apply the operator to the plain forms of both operands."""
        return self.op.func(to_string(self.left), to_string(self.right))


@dataclass(frozen=True)
class If:
    """
    A decision point in an if/elif/else chain.

    Attributes:
        test: Condition guarding the body
        body: Fields run when the condition holds
        next: The elif (another If) or else continuation, if any
    """
    test: Comparison
    body: List[Field] = field(default_factory=list)
    next: Optional['BashIf'] = None


@dataclass(frozen=True)
class Else:
    """Terminal, unconditional branch."""
    body: List[Field] = field(default_factory=list)


BashIf = Union[If, Else]


def to_string(value: BashString) -> str:
    """
    Plain text form of a string, with the quoting removed.

    A backtick is represented by its command line; anything other than a
    command inside the backticks has no plain form and yields ''.
    """
    if isinstance(value, Backticked):
        inner = value.field
        if isinstance(inner, Command):
            return ' '.join([inner.name] + [to_string(arg) for arg in inner.args])
        return ''
    return value.text
