"""
Selector Transformer: Lark tree transformer for span selectors.

Converts parse trees of ``name``, ``name.feature`` and
``name.feature=value`` specifiers into SpanSelector nodes.
"""

from lark import Transformer, v_args

from wnsuggest.selector_ast import SpanSelector


@v_args(inline=True)
class SelectorTransformer(Transformer):
    """Transformer that turns a selector parse tree into a SpanSelector."""

    def start(self, type_name, clause=None):
        """Transform the whole selector."""
        feature, value = clause if clause is not None else (None, None)
        return SpanSelector(type_name=type_name, feature=feature, value=value)

    def type_name(self, token):
        return str(token)

    def feature_name(self, token):
        return str(token)

    def feature_clause(self, feature, value=None):
        """Transform ``.feature`` with an optional ``=value`` tail."""
        return (feature, value)

    def value_clause(self, _eq, value):
        return value

    def value(self, token):
        """Transform a bare or quoted value, stripping quotes."""
        if token.type == "ESCAPED_STRING":
            return token.value[1:-1]
        return str(token)
