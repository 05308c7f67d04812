"""
Output shaping for the enrichment engine.

Writes the relation data of a matched lookup onto the document, either onto
the annotated span itself (merge mode) or onto one new span per accepted
sense (create mode).
"""

import logging
from typing import Any, Dict, Optional

from ..document import Span
from ..selector_ast import OutputTarget
from .core import EnrichmentContext, Matched, OutputPolicy
from .relations import RelationAggregator, SenseRelations

logger = logging.getLogger(__name__)


class OutputShaper:
    """
    Writes relation data according to an output policy.

    Merge mode applies when no output target is configured: only the first
    accepted sense is written and an existing feature key is never replaced.
    Create mode adds one span of the target type per accepted sense, at the
    offsets of the annotated span, in the context's output set.
    """

    def __init__(
        self,
        aggregator: RelationAggregator,
        policy: Optional[OutputPolicy] = None,
        output_target: Optional[OutputTarget] = None,
    ):
        self.aggregator = aggregator
        self.policy = policy or OutputPolicy()
        self.output_target = output_target

    @property
    def create_mode(self) -> bool:
        return self.output_target is not None

    def write(self, context: EnrichmentContext, target: Span, result: Matched):
        """Write the relation data of a matched lookup for one annotated span."""
        if self.output_target is None:
            self._merge(context, target, result)
        else:
            self._create(context, target, result)

    def _merge(self, context: EnrichmentContext, target: Span, result: Matched):
        first = result.senses[0]
        collected = self.aggregator.collect(first)
        written = self._apply(target.features, result.term, collected)
        context.stats.features_written += written
        logger.debug(
            "Merged %s features for %r onto span %s", written, result.term, target.id
        )

    def _create(self, context: EnrichmentContext, target: Span, result: Matched):
        for accepted in result.senses:
            collected = self.aggregator.collect(accepted)
            span = context.output_set.add(
                self.output_target.type_name,
                target.start,
                target.end,
                self.output_target.discriminator(),
            )
            context.stats.annotations_created += 1
            context.stats.features_written += self._apply(
                span.features, result.term, collected
            )
        logger.debug(
            "Created %s %s spans for %r at [%s, %s)",
            len(result.senses),
            self.output_target.type_name,
            result.term,
            target.start,
            target.end,
        )

    def _apply(
        self, features: Dict[str, Any], term: str, collected: SenseRelations
    ) -> int:
        written = 0
        for category, values in collected.relations.items():
            if values and self._put(features, category, self.policy.render(values)):
                written += 1
        if collected.gloss and self._put(features, "gloss", collected.gloss):
            written += 1
        if self.policy.phonetic is not None:
            code = self.policy.phonetic(term)
            if code and self._put(features, "phonetic", code):
                written += 1
        return written

    @staticmethod
    def _put(features: Dict[str, Any], key: str, value: Any) -> bool:
        if key in features:
            logger.debug("Feature %r already set, keeping existing value", key)
            return False
        features[key] = value
        return True
