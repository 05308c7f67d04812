"""
Parser for span-type selectors and output targets.

Loads the lark grammar once and turns selector text such as
``Token.category=NN`` into the objects defined in ``selector_ast``.
"""

import logging
from pathlib import Path

from lark import Lark
from lark.exceptions import LarkError

from wnsuggest.selector_ast import OutputTarget, SpanSelector
from wnsuggest.selector_transformer import SelectorTransformer

logger = logging.getLogger(__name__)

# Selector grammar version, kept in step with the header of the grammar file.
SELECTOR_GRAMMAR_VERSION = "1.0"

GRAMMAR_PATH = Path(__file__).parent / "selector_grammar.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    SELECTOR_GRAMMAR = f.read()

selector_parser = Lark(SELECTOR_GRAMMAR, start="start", parser="lalr")


class SelectorError(ValueError):
    """Raised for a span selector that does not match the selector grammar."""


def parse_selector(text: str) -> SpanSelector:
    """
    Parse a span selector of the form ``name``, ``name.feature``,
    ``name.feature=value`` or ``name.feature==value``.

    Raises:
        SelectorError: if the text is empty or malformed
    """
    if text is None or not str(text).strip():
        raise SelectorError("Empty span selector")
    try:
        tree = selector_parser.parse(str(text))
        return SelectorTransformer().transform(tree)
    except LarkError as e:
        raise SelectorError(f"Malformed span selector {text!r}: {e}") from e


def parse_output_target(text: str) -> OutputTarget:
    """
    Parse an output span type, optionally ``Type.feature=value``.

    A feature without a value carries no discriminator and is dropped.
    """
    selector = parse_selector(text)
    if selector.feature is not None and selector.value is None:
        logger.debug(
            "Output type %r names feature %r without a value; ignoring it",
            text,
            selector.feature,
        )
        return OutputTarget(type_name=selector.type_name)
    return OutputTarget(
        type_name=selector.type_name,
        feature=selector.feature,
        value=selector.value,
    )
