"""
Static resolution of if/elif/else chains.
"""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..script.types import BashIf, Comparison, Else, Field, If, IfBlock
from ..variables.namespace import Namespace

if TYPE_CHECKING:
    from .walker import FieldWalker


logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """
    Decides which branch of a conditional is taken, when it can be known.

    The chain is tried in order. The first test that holds, or an else
    reached after every test failed, selects the branch: its simplified
    body replaces the whole construct and its assignments are kept. If
    every test fails and there is no else, the construct is kept for a
    later stage, with the operands that were evaluated already
    substituted, and none of its effects on the namespace are kept.
    """

    def __init__(self, walker: 'FieldWalker'):
        """
        Initialize the condition evaluator.

        Args:
            walker: Walker used to simplify the selected branch body
        """
        self.walker = walker

    def resolve_if(self, namespace: Namespace, chain: BashIf) -> Tuple[List[Field], Namespace]:
        """
        Resolve a conditional chain.

        Args:
            namespace: Bindings in effect where the conditional appears
            chain: The first node of the chain

        Returns:
            The fields that take the place of the conditional, and the
            namespace in effect after it
        """
        before = namespace.copy()
        fields, namespace, remaining = self._resolve(namespace, chain)

        if fields is None:
            logger.debug("Conditional could not be resolved statically, keeping it")
            return [IfBlock(remaining)], before

        return fields, namespace

    def evaluate(self, namespace: Namespace, test: Comparison) -> Tuple[bool, Comparison]:
        """
        Evaluate a comparison after substituting both operands.

        Returns:
            Whether the comparison holds, and the substituted comparison
        """
        substitutor = self.walker.substitutor
        left = substitutor.replace_string(namespace, test.left)
        right = substitutor.replace_string(namespace, test.right)
        substituted = Comparison(test.op, left, right)
        return substituted.holds(), substituted

    def _resolve(
        self,
        namespace: Namespace,
        node: BashIf
    ) -> Tuple[Optional[List[Field]], Namespace, BashIf]:
        if isinstance(node, Else):
            logger.debug("Taking else branch")
            fields, namespace = self.walker.replace(namespace, node.body)
            return fields, namespace, node

        holds, test = self.evaluate(namespace, node.test)
        if holds:
            logger.debug(f"Condition holds: {test.op.value}, taking its branch")
            fields, namespace = self.walker.replace(namespace, node.body)
            return fields, namespace, node

        if node.next is None:
            return None, namespace, replace(node, test=test)

        fields, namespace, rest = self._resolve(namespace, node.next)
        if fields is None:
            return None, namespace, replace(node, test=test, next=rest)
        return fields, namespace, node
