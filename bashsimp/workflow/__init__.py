"""Script simplification: field walking and conditional resolution."""

from .walker import FieldWalker, simplify, simplify_script, simplify_namespace
from .conditions import ConditionEvaluator

__all__ = ['FieldWalker', 'ConditionEvaluator', 'simplify', 'simplify_script', 'simplify_namespace']
