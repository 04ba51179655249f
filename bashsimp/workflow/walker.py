"""
Field walker: simplifies a script by threading the namespace through it.
"""

import logging
from typing import List, Optional, Tuple

from ..script.render import render_string
from ..script.types import Backticked, BashString, Command, Field, Function, IfBlock, Script, Variable, to_string
from ..variables.namespace import Namespace
from ..variables.substitution import VariableSubstitutor
from .conditions import ConditionEvaluator


logger = logging.getLogger(__name__)


class FieldWalker:
    """
    Rewrites script fields in order, substituting known variables.

    One namespace is carried from field to field. Assignments are visible
    to every later field, and so are assignments made by the selected
    branch of a resolved conditional. A function body is simplified with
    the bindings in effect at its definition, but what it assigns stays
    inside it.
    """

    def __init__(self):
        """Initialize the walker and its collaborators."""
        self.substitutor = VariableSubstitutor(field_rewriter=self.rewrite_field)
        self.conditions = ConditionEvaluator(self)

    def simplify(self, namespace: Optional[Namespace], script: Script) -> Tuple[Script, Namespace]:
        """
        Simplify a script.

        Args:
            namespace: Initial bindings (left untouched), or None for none
            script: Fields to simplify

        Returns:
            The simplified script and the namespace at its end
        """
        namespace = namespace.copy() if namespace is not None else Namespace()
        return self.replace(namespace, script)

    def replace(self, namespace: Namespace, fields: List[Field]) -> Tuple[List[Field], Namespace]:
        """
        Rewrite a sequence of fields.

        A conditional may be replaced by zero or more fields, so the result
        can be shorter or longer than the input.
        """
        result: List[Field] = []
        for field in fields:
            if isinstance(field, IfBlock):
                spliced, namespace = self.conditions.resolve_if(namespace, field.chain)
                result.extend(spliced)
            else:
                result.append(self.rewrite_field(namespace, field))
        return result, namespace

    def rewrite_field(self, namespace: Namespace, field: Field) -> Field:
        """
        Rewrite a single field.

        Variable assignments update namespace. Conditionals are only
        resolved as part of a sequence, see replace().
        """
        if isinstance(field, Function):
            body, _ = self.replace(namespace.copy(), field.body)
            return Function(field.name, body)
        elif isinstance(field, Command):
            args = [self.substitutor.replace_string(namespace, arg) for arg in field.args]
            return Command(field.name, args)
        elif isinstance(field, Variable):
            value = [self.substitutor.replace_string(namespace, segment) for segment in field.value]
            namespace.insert(field.name, [bound_value(segment) for segment in value])
            return Variable(field.name, value)
        else:
            return field


def bound_value(segment: BashString) -> str:
    """
    Text stored in the namespace for an assigned segment.

    Backticks keep their backticks so that later uses still run the
    command rather than print its name.
    """
    if isinstance(segment, Backticked):
        return render_string(segment)
    return to_string(segment)

def simplify(namespace: Optional[Namespace], script: Script) -> Tuple[Script, Namespace]:
    """Simplify a script, returning the new script and the final namespace."""
    return FieldWalker().simplify(namespace, script)


def simplify_script(namespace: Optional[Namespace], script: Script) -> Script:
    """Simplify a script, keeping only the script."""
    return simplify(namespace, script)[0]


def simplify_namespace(namespace: Optional[Namespace], script: Script) -> Namespace:
    """Simplify a script, keeping only the final namespace."""
    return simplify(namespace, script)[1]
