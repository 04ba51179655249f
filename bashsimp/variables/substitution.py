"""
Variable substitution implementation.
Handles $var and ${var} resolution against a Namespace, honouring the
quoting rules of each string variant.
"""

import re
from typing import Callable, Optional

from ..script.types import BashString, Backticked, DoubleQuoted, Field, SingleQuoted, Unquoted
from .namespace import Namespace


FieldRewriter = Callable[[Namespace, Field], Field]


class VariableSubstitutor:
    """
    Substitutes known variables into script strings.

    - 'single quoted' text is left alone
    - "double quoted" and bare text is scanned for $name / ${name}
    - `backticks` are rewritten structurally through the field rewriter,
      never executed
    """

    # $name or ${name}. Braces are matched loosely and braced array forms
    # like ${foo[0]} are not matched; $foo[0] still expands $foo.
    VAR_PATTERN = re.compile(r'\$(?:\{\w+(?![\w\[])\}?|\w+\}?)')

    def __init__(self, field_rewriter: Optional[FieldRewriter] = None):
        """
        Initialize the substitutor.

        Args:
            field_rewriter: Rewrites the field nested in a backtick. Without
                one, backticked strings pass through unchanged.
        """
        self.field_rewriter = field_rewriter

    def replace_string(self, namespace: Namespace, value: BashString) -> BashString:
        """
        Substitute variables in a string according to its quoting.

        Args:
            namespace: Current variable bindings
            value: The string to rewrite

        Returns:
            A string of the same quoting variant with variables substituted
        """
        if isinstance(value, SingleQuoted):
            return value
        elif isinstance(value, DoubleQuoted):
            return DoubleQuoted(self.substitute(namespace, value.text))
        elif isinstance(value, Unquoted):
            return Unquoted(self.substitute(namespace, value.text))
        elif isinstance(value, Backticked):
            if self.field_rewriter is None:
                return value
            return Backticked(self.field_rewriter(namespace, value.field))
        return value

    def substitute(self, namespace: Namespace, text: str) -> str:
        """
        Substitute variable references in raw text.

        Only the first segment of a variable's value is used. Unknown
        variables are left exactly as written. Substituted values are not
        scanned again.

        Args:
            namespace: Current variable bindings
            text: Text containing $var references

        Returns:
            Text with the known variables substituted
        """
        def replace_var(match):
            reference = match.group(0)
            name = ''.join(c for c in reference if c not in '${}')
            segments = namespace.lookup(name)
            if not segments:
                # Unknown (or bound to nothing): keep the reference as text
                return reference
            return segments[0]

        return self.VAR_PATTERN.sub(replace_var, text)
