"""
Candidate extraction for the enrichment engine.

Walks the spans selected by each configured span-type selector, drops spans
caught by the exclusion filters, derives the term each remaining span
contributes and applies the minimum word length gate.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..document import Span
from ..selector_ast import SpanSelector
from ..selector_parser import SelectorError, parse_selector
from .core import Candidate, EnrichmentContext

logger = logging.getLogger(__name__)


class CandidateExtractor:
    """
    Selects candidate spans and resolves the term each one contributes.

    Selector parsing is cached per selector text, so a malformed selector is
    reported once and then silently selects nothing.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        term_features: Sequence[str] = ("string",),
        shortest_word: int = 4,
        ignore_missing_input_feature: bool = False,
        exclude_if_within: Sequence[str] = (),
        exclude_if_contains: Sequence[str] = (),
        token_type: str = "Token",
        token_kind: Optional[Tuple[str, str]] = ("kind", "word"),
    ):
        self.term_features = list(term_features)
        self.shortest_word = shortest_word
        self.ignore_missing_input_feature = ignore_missing_input_feature
        self.exclude_if_within = list(exclude_if_within)
        self.exclude_if_contains = list(exclude_if_contains)
        self.token_type = token_type
        self.token_kind = token_kind
        self._selector_cache: Dict[str, Optional[SpanSelector]] = {}

    def selector(self, text: str) -> Optional[SpanSelector]:
        """Parse a selector, returning None (and warning once) if it is malformed."""
        if text in self._selector_cache:
            return self._selector_cache[text]
        try:
            selector = parse_selector(text)
        except SelectorError as e:
            logger.warning("Ignoring span selector %r: %s", text, e)
            selector = None
        self._selector_cache[text] = selector
        return selector

    def select(self, context: EnrichmentContext, selector_text: str) -> List[Span]:
        """Spans of the input set matched by a selector, in start-offset order."""
        selector = self.selector(selector_text)
        if selector is None:
            return []
        return context.input_set.get(
            selector.type_name,
            constraints=selector.constraints,
            required_features=selector.required_features,
        )

    def is_excluded(self, context: EnrichmentContext, span: Span) -> bool:
        """True if the span lies within, or contains, an excluded span type."""
        for type_name in self.exclude_if_within:
            if context.input_set.covering(type_name, span.start, span.end):
                logger.debug(
                    "Span %s [%s, %s) is within a %s span",
                    span.id,
                    span.start,
                    span.end,
                    type_name,
                )
                return True
        for type_name in self.exclude_if_contains:
            if context.input_set.contained(span.start, span.end, type_name):
                logger.debug(
                    "Span %s [%s, %s) contains a %s span",
                    span.id,
                    span.start,
                    span.end,
                    type_name,
                )
                return True
        return False

    def derive_term(
        self, context: EnrichmentContext, span: Span
    ) -> Tuple[Optional[str], bool]:
        """
        Resolve the term for a span.

        Returns:
            (term, from_feature). The term is the first non-empty configured
            feature value, else the document text under the span; it is None
            when missing-feature suppression forbids the text fallback.
        """
        for name in self.term_features:
            value = span.features.get(name)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                return text, True
        if self.ignore_missing_input_feature:
            return None, False
        return context.document.substring(span.start, span.end).strip(), False

    def word_tokens(self, context: EnrichmentContext, span: Span) -> List[Span]:
        """Word tokens nested inside a span, in offset order."""
        constraints = None
        if self.token_kind and self.token_kind[0] and self.token_kind[1] is not None:
            constraints = {self.token_kind[0]: self.token_kind[1]}
        return [
            token
            for token in context.token_set.get(self.token_type, constraints=constraints)
            if token.start >= span.start and token.end <= span.end
        ]

    def extract(
        self, context: EnrichmentContext, selector_text: str
    ) -> Iterator[Candidate]:
        """Yield candidates for one selector, updating the context statistics."""
        stats = context.stats
        for span in self.select(context, selector_text):
            stats.spans_seen += 1
            if self.is_excluded(context, span):
                stats.spans_excluded += 1
                continue

            term, from_feature = self.derive_term(context, span)
            if term is not None and len(term) < self.shortest_word:
                logger.debug("Term %r is shorter than %s", term, self.shortest_word)
                stats.spans_gated += 1
                continue

            tokens = [] if from_feature else self.word_tokens(context, span)
            yield Candidate(
                span=span, term=term, from_feature=from_feature, tokens=tokens
            )
