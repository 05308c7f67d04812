"""
Lookup strategy for the enrichment engine.

Decides, per candidate, whether to try the whole phrase, the individual words
of the term, or the nested word tokens, and in which order.
"""

import logging
import re
from typing import Iterator, List, Tuple

from ..document import Span
from .core import Candidate, LookupResult
from .senses import SenseResolver

logger = logging.getLogger(__name__)

WORD_SPLIT = re.compile(r"[\W\s\xa0]+")


class MatchingStrategy:
    """
    Plans and issues the lookups for one candidate.

    1. Full phrase (optional): the whole term as one lookup. Any sense
       returned by the backend ends the candidate's lookups.
    2. Fallback: each word of a feature-derived term against the candidate
       span, or each nested word token's root feature against that token when
       the term came from the document text (or was suppressed).
    """

    def __init__(
        self,
        resolver: SenseResolver,
        attempt_full_match: bool = False,
        shortest_word: int = 4,
        token_root: str = "string",
    ):
        self.resolver = resolver
        self.attempt_full_match = attempt_full_match
        self.shortest_word = shortest_word
        self.token_root = token_root

    @staticmethod
    def split_words(term: str) -> List[str]:
        return [w for w in WORD_SPLIT.split(term) if w]

    def lookups(self, candidate: Candidate) -> Iterator[Tuple[Span, LookupResult]]:
        """
        Yield (annotated span, lookup result) pairs for a candidate.

        Lookups are issued lazily, so a successful full-phrase lookup means no
        fallback lookup ever reaches the backend.
        """
        span = candidate.span
        if self.attempt_full_match and candidate.term is not None:
            result = self.resolver.resolve(candidate.term, span.features)
            yield span, result
            if result.backend_hits > 0:
                return
            logger.debug("No full-phrase match for %r", candidate.term)

        if candidate.from_feature:
            for word in self.split_words(candidate.term):
                if len(word) >= self.shortest_word:
                    yield span, self.resolver.resolve(word, span.features)
            return

        for token in candidate.tokens:
            root = token.features.get(self.token_root)
            text = "" if root is None else str(root)
            if len(text) >= self.shortest_word:
                yield token, self.resolver.resolve(text, token.features)
