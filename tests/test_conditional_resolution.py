"""
Tests for static resolution of if/elif/else chains.
"""

from bashsimp.script.types import (
    Command,
    CompOp,
    Comparison,
    DoubleQuoted,
    Else,
    If,
    IfBlock,
    SingleQuoted,
    Unquoted,
    Variable,
)
from bashsimp.variables.namespace import Namespace
from bashsimp.workflow.walker import FieldWalker


def assign(name, value):
    return Variable(name, [DoubleQuoted(value)])


def x_equals(value, op=CompOp.EQ):
    return Comparison(op, DoubleQuoted('$x'), DoubleQuoted(value))


class TestConditionEvaluator:
    """Resolving conditionals with ConditionEvaluator."""

    def test_true_branch_spliced(self):
        """if [ "$x" == "1" ]; then y="a"; else y="b"; fi with x=1."""
        walker = FieldWalker()
        chain = If(x_equals('1'), [assign('y', 'a')], Else([assign('y', 'b')]))

        fields, namespace = walker.conditions.resolve_if(Namespace({'x': ['1']}), chain)

        assert fields == [assign('y', 'a')]
        assert namespace.lookup('y') == ['a']

    def test_else_branch_spliced(self):
        """Same chain with x=2 takes the else branch."""
        walker = FieldWalker()
        chain = If(x_equals('1'), [assign('y', 'a')], Else([assign('y', 'b')]))

        fields, namespace = walker.conditions.resolve_if(Namespace({'x': ['2']}), chain)

        assert fields == [assign('y', 'b')]
        assert namespace.lookup('y') == ['b']

    def test_elif_branch_selected(self):
        walker = FieldWalker()
        chain = If(
            x_equals('1'), [assign('y', 'a')],
            If(x_equals('2'), [assign('y', 'b')], Else([assign('y', 'c')]))
        )

        fields, namespace = walker.conditions.resolve_if(Namespace({'x': ['2']}), chain)

        assert fields == [assign('y', 'b')]
        assert namespace.lookup('y') == ['b']

    def test_first_true_branch_wins(self):
        walker = FieldWalker()
        chain = If(x_equals('1'), [assign('y', 'first')], If(x_equals('1'), [assign('y', 'second')]))

        fields, _ = walker.conditions.resolve_if(Namespace({'x': ['1']}), chain)

        assert fields == [assign('y', 'first')]

    def test_undecidable_if_preserved(self):
        """No else and a false test: the block stays, operands substituted."""
        walker = FieldWalker()
        before = Namespace({'x': ['2']})
        chain = If(x_equals('1'), [assign('y', 'a')])

        fields, namespace = walker.conditions.resolve_if(before, chain)

        expected = If(
            Comparison(CompOp.EQ, DoubleQuoted('2'), DoubleQuoted('1')),
            [assign('y', 'a')]
        )
        assert fields == [IfBlock(expected)]
        assert namespace == Namespace({'x': ['2']})
        assert namespace.lookup('y') is None

    def test_undecidable_unknown_operand_kept_as_text(self):
        walker = FieldWalker()
        chain = If(x_equals('1'), [assign('y', 'a')])

        fields, namespace = walker.conditions.resolve_if(Namespace(), chain)

        assert fields == [IfBlock(chain)]
        assert len(namespace) == 0

    def test_undecidable_elif_chain_kept_whole(self):
        walker = FieldWalker()
        chain = If(
            x_equals('1'), [assign('y', 'a')],
            If(Comparison(CompOp.EQ, Unquoted('$x'), SingleQuoted('$x')), [assign('y', 'b')])
        )

        fields, _ = walker.conditions.resolve_if(Namespace({'x': ['3']}), chain)

        expected = If(
            Comparison(CompOp.EQ, DoubleQuoted('3'), DoubleQuoted('1')), [assign('y', 'a')],
            If(Comparison(CompOp.EQ, Unquoted('3'), SingleQuoted('$x')), [assign('y', 'b')])
        )
        assert fields == [IfBlock(expected)]

    def test_taken_branch_body_is_simplified(self):
        walker = FieldWalker()
        chain = If(x_equals('1'), [assign('y', 'v$x'), Command('echo', [DoubleQuoted('$y')])])

        fields, namespace = walker.conditions.resolve_if(Namespace({'x': ['1']}), chain)

        assert fields == [assign('y', 'v1'), Command('echo', [DoubleQuoted('v1')])]
        assert namespace.lookup('y') == ['v1']

    def test_empty_branch_removes_block(self):
        walker = FieldWalker()
        chain = If(x_equals('1'), [], Else([assign('y', 'b')]))

        fields, _ = walker.conditions.resolve_if(Namespace({'x': ['1']}), chain)

        assert fields == []


class TestComparisonOperators:
    """String comparison semantics."""

    def evaluate(self, op, left, right):
        walker = FieldWalker()
        holds, _ = walker.conditions.evaluate(
            Namespace({'l': [left]}),
            Comparison(op, DoubleQuoted('$l'), DoubleQuoted(right))
        )
        return holds

    def test_equality_operators(self):
        assert self.evaluate(CompOp.EQ, 'a', 'a') is True
        assert self.evaluate(CompOp.EQ, 'a', 'b') is False
        assert self.evaluate(CompOp.NE, 'a', 'b') is True
        assert self.evaluate(CompOp.NE, 'a', 'a') is False

    def test_ordering_is_lexicographic(self):
        assert self.evaluate(CompOp.GT, 'b', 'a') is True
        assert self.evaluate(CompOp.LT, '10', '9') is True
        assert self.evaluate(CompOp.GE, 'abc', 'abc') is True
        assert self.evaluate(CompOp.LE, 'abc', 'abd') is True
        assert self.evaluate(CompOp.LE, 'b', 'a') is False
