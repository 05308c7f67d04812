"""
Sense resolution for the enrichment engine.

Looks terms up in the lexical backend, filters senses by part of speech and
bounds the number of senses kept. Returns Matched or NoMatch instead of
raising for terms that are not found.
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional

from ..lexicon import LexicalBackend, LexiconError, PosCategory
from .core import (
    DEFAULT_POS_TAG_PREFIXES,
    AcceptedSense,
    LookupResult,
    Matched,
    NoMatch,
)

logger = logging.getLogger(__name__)

WHITESPACE_RUN = re.compile(r"[\s\xa0]+")


class SenseResolver:
    """
    Resolves a term to a bounded, POS-filtered list of senses.

    Two call paths:
    - POS hint: the hint comes from the tag feature of the annotated span, the
      lookup is unconstrained and, with ``match_pos``, senses whose POS differs
      from the hint are discarded without counting toward the bound.
    - Explicit POS: the caller supplies a category, the lookup is constrained
      to it and no further filtering happens.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        backend: LexicalBackend,
        truncate_size: int = 4,
        match_pos: bool = True,
        pos_table: Optional[Dict[str, PosCategory]] = None,
        pos_feature: str = "category",
        phrase_joiner: str = "_",
    ):
        self.backend = backend
        self.truncate_size = truncate_size
        self.match_pos = match_pos
        if pos_table is None:
            pos_table = {
                prefix: PosCategory.from_name(name)
                for prefix, name in DEFAULT_POS_TAG_PREFIXES.items()
            }
        # Longest prefix first so "NNP"-style entries win over "NN"
        self._pos_prefixes = sorted(
            pos_table.items(), key=lambda item: len(item[0]), reverse=True
        )
        self.pos_feature = pos_feature
        self.phrase_joiner = phrase_joiner

    def normalize(self, term: str) -> str:
        """Join whitespace runs so multi-word entries can match."""
        return WHITESPACE_RUN.sub(self.phrase_joiner, term.strip())

    def pos_hint(self, features: Optional[Mapping[str, Any]]) -> PosCategory:
        """Category for the span's tag feature; unknown or missing tags mean noun."""
        tag = (features or {}).get(self.pos_feature)
        if tag is None:
            return PosCategory.NOUN
        tag = str(tag)
        for prefix, category in self._pos_prefixes:
            if tag.startswith(prefix):
                return category
        return PosCategory.NOUN

    def resolve(
        self,
        term: str,
        features: Optional[Mapping[str, Any]] = None,
        pos: Optional[PosCategory] = None,
    ) -> LookupResult:
        """
        Look up a term and keep at most ``truncate_size`` senses.

        Args:
            term: Term to look up; whitespace is joined before the lookup
            features: Features of the annotated span, source of the POS hint
            pos: Explicit category; selects the constrained-lookup path

        Returns:
            Matched with the accepted senses, or NoMatch
        """
        lookup_term = self.normalize(term)
        hint = None if pos is not None else self.pos_hint(features)
        try:
            senses = list(self.backend.lookup(lookup_term, pos) or [])
        except LexiconError as e:
            logger.warning("Lookup failed for %r: %s", lookup_term, e)
            return NoMatch(term=lookup_term, error=str(e))

        if not senses:
            logger.debug("No senses for %r", lookup_term)
            return NoMatch(term=lookup_term)

        accepted = []
        for sense in senses:
            if hint is not None and self.match_pos and sense.pos != hint:
                continue
            if len(accepted) >= self.truncate_size:
                break
            if pos is None or pos == sense.pos:
                categories = (sense.pos,)
            else:
                categories = (pos, sense.pos)
            accepted.append(AcceptedSense(sense=sense, categories=categories))

        logger.debug(
            "Resolved %r: %s senses returned, %s accepted",
            lookup_term,
            len(senses),
            len(accepted),
        )
        if not accepted:
            return NoMatch(term=lookup_term, backend_hits=len(senses))
        return Matched(term=lookup_term, senses=tuple(accepted), backend_hits=len(senses))
