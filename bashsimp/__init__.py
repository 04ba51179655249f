"""
Static simplifier for parsed bash scripts.

Substitutes known variable values into a script AST and resolves
conditionals that can be decided without running anything.
"""

from .variables import Namespace, VariableSubstitutor
from .workflow import FieldWalker, ConditionEvaluator, simplify, simplify_script, simplify_namespace

__all__ = [
    'Namespace',
    'VariableSubstitutor',
    'FieldWalker',
    'ConditionEvaluator',
    'simplify',
    'simplify_script',
    'simplify_namespace',
]
