"""
WordNet suggester orchestrating the enrichment pipeline.

Runs, per document and per configured span-type selector:
1. Candidate extraction (selection, exclusion, term derivation, length gate)
2. Lookup planning (full phrase first, then per word or per token)
3. Sense resolution (backend lookup, POS filter, sense bound)
4. Relation aggregation and output shaping for every matched lookup
"""

import logging
from typing import Callable, Optional

from .config import SuggesterConfig
from .document import Document
from .enricher import (
    CandidateExtractor,
    EnrichmentContext,
    EnrichmentStats,
    MatchingStrategy,
    OutputPolicy,
    OutputShaper,
    RelationAggregator,
    SenseResolver,
    get_encoder,
)
from .lexicon import LexicalBackend, LexiconError, NltkWordNet
from .selector_parser import parse_output_target

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


# pylint: disable=too-many-instance-attributes
class WordNetSuggester:
    """
    Adds lexical relation features to annotated documents.

    The backend is created by ``initialize()``. If it cannot be created the
    suggester is disabled and every document is skipped with a warning.
    """

    def __init__(
        self,
        config: Optional[SuggesterConfig] = None,
        backend_factory: Callable[[], LexicalBackend] = NltkWordNet,
    ):
        """
        Args:
            config: Suggester options; defaults apply when omitted
            backend_factory: Zero-argument callable returning the lexical backend

        Raises:
            SelectorError: If ``output_as_type`` cannot be parsed
        """
        self.config = config or SuggesterConfig()
        self.backend_factory = backend_factory
        self.backend: Optional[LexicalBackend] = None
        self.disabled = False

        cfg = self.config
        self.output_target = (
            parse_output_target(cfg.output_as_type) if cfg.output_as_type else None
        )
        phonetic = get_encoder(cfg.phonetic_encoding) if cfg.phonetic_encoding else None
        self.policy = OutputPolicy(
            list_format=cfg.output_list_format,
            phonetic=phonetic,
            phonetic_name=cfg.phonetic_encoding,
        )
        token_kind = None
        if cfg.tok_kind_feature and cfg.tok_kind_value is not None:
            token_kind = (cfg.tok_kind_feature, cfg.tok_kind_value)
        self.extractor = CandidateExtractor(
            term_features=cfg.input_as_type_features,
            shortest_word=cfg.shortest_word,
            ignore_missing_input_feature=cfg.ignore_missing_input_feature,
            exclude_if_within=cfg.exclude_if_within,
            exclude_if_contains=cfg.exclude_if_contains,
            token_type=cfg.tok_name,
            token_kind=token_kind,
        )
        self.aggregator = RelationAggregator(
            truncate_size=cfg.truncate_size,
            full_hypernym_hierarchy=cfg.output_full_hypernym_hierarchy,
            max_hypernym_depth=cfg.max_hypernym_depth,
            add_gloss=cfg.add_gloss,
        )
        self.shaper = OutputShaper(self.aggregator, self.policy, self.output_target)
        self.resolver: Optional[SenseResolver] = None
        self.matcher: Optional[MatchingStrategy] = None

    def initialize(self) -> bool:
        """Create the backend. Returns False (and disables the suggester) on failure."""
        try:
            backend = self.backend_factory()
        except LexiconError as e:
            logger.error("Lexical backend unavailable, suggester disabled: %s", e)
            self.disabled = True
            return False

        cfg = self.config
        self.backend = backend
        self.resolver = SenseResolver(
            backend,
            truncate_size=cfg.truncate_size,
            match_pos=cfg.match_pos,
            pos_table=cfg.pos_table(),
            pos_feature=cfg.tok_category,
            phrase_joiner=cfg.phrase_joiner,
        )
        self.matcher = MatchingStrategy(
            self.resolver,
            attempt_full_match=cfg.attempt_full_match,
            shortest_word=cfg.shortest_word,
            token_root=cfg.tok_root,
        )
        self.disabled = False
        logger.debug("Initialized suggester with %s", type(backend).__name__)
        return True

    def process(
        self, document: Document, progress_callback: Optional[ProgressCallback] = None
    ) -> EnrichmentStats:
        """
        Enrich one document in place.

        Args:
            document: Document whose spans are enriched
            progress_callback: Optional callback(stage, current, total), called
                once per span-type selector

        Returns:
            Statistics for this document; ``skipped`` is set when disabled
        """
        if self.matcher is None and not self.disabled:
            self.initialize()
        if self.disabled:
            logger.warning(
                "Suggester disabled, skipping document %s", document.name or "<unnamed>"
            )
            return EnrichmentStats(skipped=True)

        cfg = self.config
        context = EnrichmentContext(
            document=document,
            input_set=document.annotations(cfg.input_as_name),
            output_set=document.annotations(cfg.output_as_name),
            token_set=document.annotations(cfg.tok_as_name),
        )
        stats = context.stats
        selectors = cfg.input_as_types
        for index, selector_text in enumerate(selectors):
            for candidate in self.extractor.extract(context, selector_text):
                for target, result in self.matcher.lookups(candidate):
                    stats.lookups += 1
                    if result:
                        stats.lookups_matched += 1
                        stats.senses_accepted += len(result.senses)
                        try:
                            self.shaper.write(context, target, result)
                        except LexiconError as e:
                            # Features written before the failure are kept
                            logger.warning(
                                "Relation lookup failed for %r: %s", result.term, e
                            )
                            stats.lookups_failed += 1
                    elif result.error is not None:
                        stats.lookups_failed += 1
            if progress_callback:
                progress_callback(selector_text, index + 1, len(selectors))

        logger.info(
            "Enriched %s: %s spans, %s lookups (%s matched), %s features, "
            "%s annotations",
            document.name or "<unnamed>",
            stats.spans_seen,
            stats.lookups,
            stats.lookups_matched,
            stats.features_written,
            stats.annotations_created,
        )
        return stats
