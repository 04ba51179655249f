"""
Tests for $var / ${var} substitution and quoting rules.
"""

import pytest

from bashsimp.script.types import Backticked, Command, DoubleQuoted, SingleQuoted, Unquoted
from bashsimp.variables.namespace import Namespace
from bashsimp.variables.substitution import VariableSubstitutor
from bashsimp.workflow.walker import FieldWalker


@pytest.fixture
def substitutor():
    return VariableSubstitutor()


class TestTextSubstitution:
    """Scanning raw text for variable references."""

    def test_plain_and_braced_references(self, substitutor):
        namespace = Namespace({'x': ['1'], 'name': ['world']})
        assert substitutor.substitute(namespace, '$x') == '1'
        assert substitutor.substitute(namespace, '${x}') == '1'
        assert substitutor.substitute(namespace, 'hello ${name}!') == 'hello world!'

    def test_multiple_references(self, substitutor):
        namespace = Namespace({'a': ['1'], 'b': ['2']})
        assert substitutor.substitute(namespace, '$a-$b/${a}') == '1-2/1'

    def test_braces_delimit_name(self, substitutor):
        """${x}yz uses x; $xyz refers to a different variable."""
        namespace = Namespace({'x': ['a']})
        assert substitutor.substitute(namespace, '${x}yz') == 'ayz'
        assert substitutor.substitute(namespace, '$xyz') == '$xyz'

    def test_first_segment_only(self, substitutor):
        """Only the head of a multi-segment value is substituted."""
        namespace = Namespace({'x': ['a', 'b']})
        assert substitutor.substitute(namespace, '$x') == 'a'

    def test_unknown_variable_untouched(self, substitutor):
        namespace = Namespace()
        assert substitutor.substitute(namespace, '${y}') == '${y}'
        assert substitutor.substitute(namespace, 'pre $y post') == 'pre $y post'

    def test_variable_bound_to_nothing_untouched(self, substitutor):
        namespace = Namespace({'e': []})
        assert substitutor.substitute(namespace, '$e') == '$e'

    def test_substituted_value_not_rescanned(self, substitutor):
        """One pass only: values containing references stay as they are."""
        namespace = Namespace({'x': ['$y'], 'y': ['b'], 'self': ['$self']})
        assert substitutor.substitute(namespace, '$x') == '$y'
        assert substitutor.substitute(namespace, '$self') == '$self'

    def test_array_references_pass_through(self, substitutor):
        namespace = Namespace({'foo': ['a']})
        assert substitutor.substitute(namespace, '${foo[0]}') == '${foo[0]}'
        assert substitutor.substitute(namespace, '${foo[@]} $foo') == '${foo[@]} a'

    def test_unbraced_reference_before_index_expands(self, substitutor):
        """$x[0] expands $x like the shell does; only ${x[0]} is left alone."""
        namespace = Namespace({'x': ['a']})
        assert substitutor.substitute(namespace, '$x[0] ${x}[0]') == 'a[0] a[0]'
        assert substitutor.substitute(namespace, '$x[0] ${x[0]}') == 'a[0] ${x[0]}'

    def test_text_without_references(self, substitutor):
        namespace = Namespace({'x': ['1']})
        assert substitutor.substitute(namespace, 'no vars here') == 'no vars here'
        assert substitutor.substitute(namespace, 'cost: $') == 'cost: $'
        assert substitutor.substitute(namespace, '') == ''


class TestQuotingRules:
    """Substitution behaviour per string variant."""

    def test_single_quotes_are_literal(self, substitutor):
        namespace = Namespace({'x': ['1']})
        value = SingleQuoted('$x ${x}')
        assert substitutor.replace_string(namespace, value) == value

    def test_double_quoted_and_bare_are_substituted(self, substitutor):
        namespace = Namespace({'x': ['1']})
        assert substitutor.replace_string(namespace, DoubleQuoted('v$x')) == DoubleQuoted('v1')
        assert substitutor.replace_string(namespace, Unquoted('v$x')) == Unquoted('v1')

    def test_backtick_without_rewriter_passes_through(self, substitutor):
        namespace = Namespace({'flag': ['-r']})
        value = Backticked(Command('uname', [Unquoted('$flag')]))
        assert substitutor.replace_string(namespace, value) == value

    def test_backtick_arguments_substituted_not_run(self):
        """Arguments inside backticks are rewritten; the command is kept as text."""
        walker = FieldWalker()
        namespace = Namespace({'flag': ['-r'], 'uname': ['nope']})
        value = Backticked(Command('uname', [Unquoted('$flag'), SingleQuoted('$flag')]))

        result = walker.substitutor.replace_string(namespace, value)

        assert result == Backticked(Command('uname', [Unquoted('-r'), SingleQuoted('$flag')]))
