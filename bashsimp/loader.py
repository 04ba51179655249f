"""Script document loader and strict validation.

Scripts are handed to the simplifier already parsed, as YAML (or JSON)
documents describing the AST:

    script:
      - variable: x
        value: [{double: "1"}]
      - command: echo
        args: [{double: "$x"}, {single: "$y"}, plain]
      - if:
          test: {op: "==", left: {double: "$x"}, right: {double: "1"}}
          then: [...]
          elif: [{test: {...}, then: [...]}]
          else: [...]
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from bashsimp.exceptions import ValidationError, ScriptValidationError
from bashsimp.script.types import (
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
)


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps words like 'on', 'off', 'yes' and 'no' as strings."""
    pass


# Bare words such as `on` or `no` are common command arguments; they must not
# turn into booleans.
PreservingLoader.yaml_implicit_resolvers = {
    key: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:bool']
    for key, resolvers in PreservingLoader.yaml_implicit_resolvers.items()
}


class ScriptLoader:
    """Loads and validates script documents."""

    FIELD_KEYS = {
        'command': {'command', 'args'},
        'variable': {'variable', 'value'},
        'function': {'function', 'body'},
        'if': {'if'},
        'comment': {'comment'},
        'other': {'other'},
    }
    STRING_KINDS = ('single', 'double', 'bare', 'backtick')
    IF_KEYS = {'test', 'then', 'elif', 'else'}

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, script_path: Path) -> Script:
        """Load and validate a script document file."""
        self.errors = []
        try:
            with open(script_path, 'r') as f:
                document = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load script: {e}")
            self._raise_validation_errors()

        return self.load_document(document)

    def load_string(self, content: str) -> Script:
        """Load and validate a script document from text."""
        self.errors = []
        try:
            document = yaml.load(content, Loader=PreservingLoader)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to load script: {e}")
            self._raise_validation_errors()

        return self.load_document(document)

    def load_document(self, document: Any) -> Script:
        """Validate an already decoded document and build the script."""
        self.errors = []
        if not isinstance(document, dict):
            self._add_error("Script document must be a YAML object/dictionary")
            self._raise_validation_errors()

        for key in document.keys():
            if key != 'script':
                self._add_error(f"Unknown top-level field '{key}'")

        if 'script' not in document:
            self._add_error("'script' field is required")
            self._raise_validation_errors()

        script = self._parse_fields(document['script'], 'script')

        if self.errors:
            self._raise_validation_errors()

        return script

    def _parse_fields(self, nodes: Any, path: str) -> List[Field]:
        """Parse a list of fields. Invalid entries are reported and skipped."""
        if nodes is None:
            return []
        if not isinstance(nodes, list):
            self._add_error("must be a list of fields", path)
            return []

        fields = []
        for i, node in enumerate(nodes):
            field = self._parse_field(node, f"{path}[{i}]")
            if field is not None:
                fields.append(field)
        return fields

    def _parse_field(self, node: Any, path: str) -> Optional[Field]:
        if not isinstance(node, dict):
            self._add_error("field must be a dictionary", path)
            return None

        kinds = [k for k in self.FIELD_KEYS if k in node]
        if not kinds:
            self._add_error(f"field requires one of {sorted(self.FIELD_KEYS)}", path)
            return None
        if len(kinds) > 1:
            self._add_error(f"field can only have one kind, found {kinds}", path)
            return None

        kind = kinds[0]
        for key in node.keys():
            if key not in self.FIELD_KEYS[kind]:
                self._add_error(f"unknown key '{key}' for {kind}", path)

        if kind == 'command':
            name = self._parse_name(node['command'], f"{path}.command")
            args = self._parse_strings(node.get('args'), f"{path}.args")
            return Command(name, args)
        elif kind == 'variable':
            name = self._parse_name(node['variable'], f"{path}.variable")
            value = node.get('value')
            if value is not None and not isinstance(value, list):
                value = [value]
            return Variable(name, self._parse_strings(value, f"{path}.value"))
        elif kind == 'function':
            name = self._parse_name(node['function'], f"{path}.function")
            return Function(name, self._parse_fields(node.get('body'), f"{path}.body"))
        elif kind == 'if':
            chain = self._parse_if(node['if'], f"{path}.if")
            return IfBlock(chain) if chain is not None else None
        elif kind == 'comment':
            return Comment(self._scalar(node['comment'], f"{path}.comment"))
        else:
            return Other(self._scalar(node['other'], f"{path}.other"))

    def _parse_if(self, node: Any, path: str) -> Optional[BashIf]:
        if not isinstance(node, dict):
            self._add_error("if must be a dictionary", path)
            return None

        for key in node.keys():
            if key not in self.IF_KEYS:
                self._add_error(f"unknown key '{key}' in if", path)

        if 'test' not in node:
            self._add_error("if requires 'test'", path)
            return None

        # Build the chain back to front so each node links to its continuation
        continuation: Optional[BashIf] = None
        if 'else' in node:
            continuation = Else(self._parse_fields(node['else'], f"{path}.else"))

        elifs = node.get('elif') or []
        if not isinstance(elifs, list):
            self._add_error("elif must be a list", f"{path}.elif")
            elifs = []

        for i in reversed(range(len(elifs))):
            branch = elifs[i]
            branch_path = f"{path}.elif[{i}]"
            if not isinstance(branch, dict) or 'test' not in branch:
                self._add_error("elif entry requires 'test'", branch_path)
                continue
            for key in branch.keys():
                if key not in ('test', 'then'):
                    self._add_error(f"unknown key '{key}' in elif", branch_path)
            test = self._parse_test(branch['test'], f"{branch_path}.test")
            body = self._parse_fields(branch.get('then'), f"{branch_path}.then")
            if test is not None:
                continuation = If(test, body, continuation)

        test = self._parse_test(node['test'], f"{path}.test")
        if test is None:
            return None
        return If(test, self._parse_fields(node.get('then'), f"{path}.then"), continuation)

    def _parse_test(self, node: Any, path: str) -> Optional[Comparison]:
        if not isinstance(node, dict):
            self._add_error("test must be a dictionary with 'op', 'left' and 'right'", path)
            return None

        missing = [k for k in ('op', 'left', 'right') if k not in node]
        if missing:
            self._add_error(f"test missing {missing}", path)
            return None

        try:
            op = CompOp(str(node['op']))
        except ValueError:
            self._add_error(
                f"unknown operator '{node['op']}', expected one of {[o.value for o in CompOp]}",
                f"{path}.op"
            )
            return None

        left = self._parse_string(node['left'], f"{path}.left")
        right = self._parse_string(node['right'], f"{path}.right")
        if left is None or right is None:
            return None
        return Comparison(op, left, right)

    def _parse_strings(self, nodes: Any, path: str) -> List[BashString]:
        if nodes is None:
            return []
        if not isinstance(nodes, list):
            self._add_error("must be a list of strings", path)
            return []

        strings = []
        for i, node in enumerate(nodes):
            value = self._parse_string(node, f"{path}[{i}]")
            if value is not None:
                strings.append(value)
        return strings

    def _parse_string(self, node: Any, path: str) -> Optional[BashString]:
        if not isinstance(node, dict):
            # Plain scalars are bare words
            return Unquoted(self._scalar(node, path))

        kinds = [k for k in self.STRING_KINDS if k in node]
        if len(kinds) != 1 or len(node) != 1:
            self._add_error(f"string must have exactly one of {list(self.STRING_KINDS)}", path)
            return None

        kind = kinds[0]
        if kind == 'backtick':
            field = self._parse_field(node['backtick'], f"{path}.backtick")
            return Backticked(field) if field is not None else None

        text = self._scalar(node[kind], f"{path}.{kind}")
        if kind == 'single':
            return SingleQuoted(text)
        elif kind == 'double':
            return DoubleQuoted(text)
        return Unquoted(text)

    def _parse_name(self, value: Any, path: str) -> str:
        if not isinstance(value, str) or not value:
            self._add_error("name must be a non-empty string", path)
            return ''
        return value

    def _scalar(self, value: Any, path: str) -> str:
        """Convert a YAML scalar to its text."""
        if isinstance(value, bool):
            return 'true' if value else 'false'
        elif isinstance(value, str):
            return value
        elif isinstance(value, (int, float)):
            return str(value)
        elif value is None:
            return ''
        self._add_error(f"expected a scalar, got {type(value).__name__}", path)
        return ''

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise ScriptValidationError with accumulated errors."""
        raise ScriptValidationError(self.errors)


def dump_script(script: Script) -> Dict[str, Any]:
    """Convert a script back into the document form accepted by ScriptLoader."""
    return {'script': [_dump_field(field) for field in script]}


def _dump_field(field: Field) -> Dict[str, Any]:
    if isinstance(field, Function):
        return {'function': field.name, 'body': [_dump_field(f) for f in field.body]}
    elif isinstance(field, Command):
        return {'command': field.name, 'args': [_dump_string(arg) for arg in field.args]}
    elif isinstance(field, Variable):
        return {'variable': field.name, 'value': [_dump_string(segment) for segment in field.value]}
    elif isinstance(field, IfBlock):
        return {'if': _dump_if(field.chain)}
    elif isinstance(field, Comment):
        return {'comment': field.text}
    elif isinstance(field, Other):
        return {'other': field.text}
    raise TypeError(f"Not a script field: {field!r}")


def _dump_if(chain: BashIf) -> Dict[str, Any]:
    if isinstance(chain, Else):
        # A chain never starts with else
        raise TypeError("Conditional chain must start with a test")

    result: Dict[str, Any] = {'test': _dump_test(chain.test), 'then': [_dump_field(f) for f in chain.body]}
    elifs = []
    node = chain.next
    while isinstance(node, If):
        elifs.append({'test': _dump_test(node.test), 'then': [_dump_field(f) for f in node.body]})
        node = node.next
    if elifs:
        result['elif'] = elifs
    if isinstance(node, Else):
        result['else'] = [_dump_field(f) for f in node.body]
    return result


def _dump_test(test: Comparison) -> Dict[str, Any]:
    return {'op': test.op.value, 'left': _dump_string(test.left), 'right': _dump_string(test.right)}


def _dump_string(value: BashString) -> Dict[str, Any]:
    if isinstance(value, SingleQuoted):
        return {'single': value.text}
    elif isinstance(value, DoubleQuoted):
        return {'double': value.text}
    elif isinstance(value, Unquoted):
        return {'bare': value.text}
    elif isinstance(value, Backticked):
        return {'backtick': _dump_field(value.field)}
    raise TypeError(f"Not a bash string: {value!r}")
