"""
Render a script AST back to bash source.
"""

from typing import List

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
    IfBlock,
    Other,
    Script,
    SingleQuoted,
    Unquoted,
    Variable,
)


INDENT = '  '


def render_script(script: Script) -> str:
    """Render a whole script, one statement per line."""
    lines = _render_fields(script, 0)
    if not lines:
        return ''
    return '\n'.join(lines) + '\n'


def render_string(value: BashString) -> str:
    if isinstance(value, SingleQuoted):
        return f"'{value.text}'"
    elif isinstance(value, DoubleQuoted):
        return f'"{value.text}"'
    elif isinstance(value, Unquoted):
        return value.text
    elif isinstance(value, Backticked):
        return f"`{render_field(value.field)}`"
    raise TypeError(f"Not a bash string: {value!r}")


def render_field(field: Field) -> str:
    """Render a single field on one line, as it would appear inside backticks."""
    lines = [line.strip() for line in _render_field(field, 0)]
    text = lines[0]
    for previous, line in zip(lines, lines[1:]):
        # No separator is allowed right after then, else or an opening brace
        separator = ' ' if previous.endswith(('then', 'else', '{')) else '; '
        text += separator + line
    return text


def render_test(test: Comparison) -> str:
    left = render_string(test.left)
    right = render_string(test.right)
    if test.op in (CompOp.EQ, CompOp.NE):
        return f"[ {left} {test.op.value} {right} ]"
    elif test.op == CompOp.GE:
        return f"[[ {left} > {right} || {left} == {right} ]]"
    elif test.op == CompOp.LE:
        return f"[[ {left} < {right} || {left} == {right} ]]"
    return f"[[ {left} {test.op.value} {right} ]]"


def _render_fields(fields: List[Field], depth: int) -> List[str]:
    lines: List[str] = []
    for field in fields:
        lines.extend(_render_field(field, depth))
    return lines


def _render_field(field: Field, depth: int) -> List[str]:
    pad = INDENT * depth

    if isinstance(field, Function):
        return [f"{pad}{field.name}() {{"] + _render_fields(field.body, depth + 1) + [f"{pad}}}"]
    elif isinstance(field, Command):
        return [pad + ' '.join([field.name] + [render_string(arg) for arg in field.args])]
    elif isinstance(field, Variable):
        if len(field.value) == 1:
            return [f"{pad}{field.name}={render_string(field.value[0])}"]
        values = ' '.join(render_string(segment) for segment in field.value)
        return [f"{pad}{field.name}=({values})"]
    elif isinstance(field, IfBlock):
        return _render_if(field.chain, depth, 'if') + [f"{pad}fi"]
    elif isinstance(field, Comment):
        return [f"{pad}# {field.text}"]
    elif isinstance(field, Other):
        return [pad + field.text]
    raise TypeError(f"Not a script field: {field!r}")


def _render_if(node: BashIf, depth: int, keyword: str) -> List[str]:
    pad = INDENT * depth
    if isinstance(node, Else):
        return [f"{pad}else"] + _render_fields(node.body, depth + 1)

    lines = [f"{pad}{keyword} {render_test(node.test)}; then"]
    lines.extend(_render_fields(node.body, depth + 1))
    if node.next is not None:
        lines.extend(_render_if(node.next, depth, 'elif'))
    return lines
