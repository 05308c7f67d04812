"""
NLTK WordNet backend.

Adapts ``nltk.corpus.wordnet`` to the lexical backend interface. The corpus
data must be installed separately::

    python -c "import nltk; nltk.download('wordnet'); nltk.download('omw-1.4')"
"""

import logging
from typing import Any, List, Optional
from zipfile import BadZipFile

from nltk.corpus.reader.wordnet import WordNetError

from .types import (
    LexicalRelation,
    LexiconLookupError,
    LexiconUnavailableError,
    PosCategory,
    SemanticRelation,
)

logger = logging.getLogger(__name__)

# Synset method names per semantic relation. WordNet 3 stores antonymy between
# lemmas only, so the synset-level antonym relation is always empty.
_SYNSET_RELATIONS = {
    SemanticRelation.HYPERNYM: "hypernyms",
    SemanticRelation.HYPONYM: "hyponyms",
    SemanticRelation.PART_MERONYM: "part_meronyms",
    SemanticRelation.MEMBER_MERONYM: "member_meronyms",
    SemanticRelation.SUBSTANCE_MERONYM: "substance_meronyms",
    SemanticRelation.PART_HOLONYM: "part_holonyms",
    SemanticRelation.MEMBER_HOLONYM: "member_holonyms",
    SemanticRelation.SUBSTANCE_HOLONYM: "substance_holonyms",
    SemanticRelation.ATTRIBUTE: "attributes",
    SemanticRelation.SIMILAR_TO: "similar_tos",
    SemanticRelation.VERB_GROUP: "verb_groups",
}

_LEMMA_RELATIONS = {
    LexicalRelation.ANTONYM: "antonyms",
    # The "\" pointer: pertainym for adjectives, derived-from-adjective for adverbs
    LexicalRelation.DERIVED_FROM_ADJECTIVE: "pertainyms",
}


class NltkSynset:
    """Wraps an ``nltk`` Synset."""

    __slots__ = ("_synset",)

    def __init__(self, synset: Any):
        self._synset = synset

    @property
    def name(self) -> str:
        return self._synset.name()

    @property
    def gloss(self) -> str:
        return self._synset.definition()

    @property
    def senses(self) -> List["NltkSense"]:
        return [NltkSense(lemma) for lemma in self._synset.lemmas()]

    def relations(self, relation: SemanticRelation) -> List["NltkSynset"]:
        method = _SYNSET_RELATIONS.get(relation)
        if method is None:
            return []
        return [NltkSynset(s) for s in getattr(self._synset, method)()]

    def __eq__(self, other) -> bool:
        return isinstance(other, NltkSynset) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"NltkSynset({self.name!r})"


class NltkSense:
    """Wraps an ``nltk`` Lemma."""

    __slots__ = ("_lemma",)

    def __init__(self, lemma: Any):
        self._lemma = lemma

    @property
    def lemma(self) -> str:
        return self._lemma.name()

    @property
    def pos(self) -> PosCategory:
        return PosCategory.from_wordnet_tag(self._lemma.synset().pos())

    @property
    def synset(self) -> NltkSynset:
        return NltkSynset(self._lemma.synset())

    def lexical_relations(self, relation: LexicalRelation) -> List["NltkSense"]:
        method = _LEMMA_RELATIONS[relation]
        return [NltkSense(lemma) for lemma in getattr(self._lemma, method)()]

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, NltkSense)
            and other.lemma == self.lemma
            and other.synset == self.synset
        )

    def __hash__(self) -> int:
        return hash((self.synset.name, self.lemma))

    def __repr__(self) -> str:
        return f"NltkSense({self.synset.name!r}, {self.lemma!r})"


class NltkWordNet:
    """
    Lexical backend over the NLTK WordNet corpus reader.

    Raises LexiconUnavailableError on construction when the corpus cannot be
    loaded, so callers can fall back to a disabled state.
    """

    def __init__(self, wordnet: Optional[Any] = None):
        if wordnet is None:
            from nltk.corpus import wordnet  # pylint: disable=import-outside-toplevel
        self._wordnet = wordnet
        try:
            # The corpus loads lazily; force it so missing data fails here
            wordnet.synsets("test")
            version = self.version
        except LookupError as e:
            raise LexiconUnavailableError(
                "WordNet corpus is not installed. Run: "
                "python -c \"import nltk; nltk.download('wordnet')\""
            ) from e
        except (OSError, BadZipFile, WordNetError, ValueError) as e:
            # Corrupt or partial corpus data
            raise LexiconUnavailableError(
                f"WordNet corpus could not be loaded: {e}"
            ) from e
        logger.info("Loaded NLTK WordNet %s", version)

    @property
    def version(self) -> str:
        get_version = getattr(self._wordnet, "get_version", None)
        return str(get_version()) if get_version else "unknown"

    def lookup(
        self, term: str, pos: Optional[PosCategory] = None
    ) -> List[NltkSense]:
        try:
            lemmas = self._wordnet.lemmas(term, pos=pos.value if pos else None)
        except (WordNetError, LookupError) as e:
            raise LexiconLookupError(f"WordNet lookup failed for {term!r}: {e}") from e
        return [NltkSense(lemma) for lemma in lemmas]
