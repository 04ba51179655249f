"""
Variable handling module.
Namespace bindings and $var substitution.
"""

from .namespace import Namespace
from .substitution import VariableSubstitutor

__all__ = ['Namespace', 'VariableSubstitutor']
