"""
Core types for the lexical backend interface.

Defines the closed part-of-speech variant, the relation vocabularies, the
structural protocols a backend must satisfy and the backend error hierarchy.
"""

from enum import Enum
from typing import List, Optional, Protocol, Sequence


class PosCategory(Enum):
    """Closed part-of-speech variant understood by the lexical backends."""

    NOUN = "n"
    VERB = "v"
    ADJECTIVE = "a"
    ADVERB = "r"

    @classmethod
    def from_wordnet_tag(cls, tag: str) -> "PosCategory":
        """Map a WordNet synset POS tag ("n", "v", "a", "s", "r") to a category."""
        if tag == "s":  # satellite adjective
            return cls.ADJECTIVE
        return cls(tag)

    @classmethod
    def from_name(cls, name: str) -> "PosCategory":
        """Accept either the member name ("noun") or the WordNet tag ("n")."""
        key = name.strip()
        try:
            return cls[key.upper()]
        except KeyError:
            return cls.from_wordnet_tag(key.lower())


class SemanticRelation(Enum):
    """Synset-to-synset (meaning-wide) relation types."""

    HYPERNYM = "hypernym"
    HYPONYM = "hyponym"
    PART_MERONYM = "part_meronym"
    MEMBER_MERONYM = "member_meronym"
    SUBSTANCE_MERONYM = "substance_meronym"
    PART_HOLONYM = "part_holonym"
    MEMBER_HOLONYM = "member_holonym"
    SUBSTANCE_HOLONYM = "substance_holonym"
    ATTRIBUTE = "attribute"
    SIMILAR_TO = "similar_to"
    VERB_GROUP = "verb_group"
    ANTONYM = "antonym"


class LexicalRelation(Enum):
    """Sense-to-sense relation types."""

    ANTONYM = "antonym"
    DERIVED_FROM_ADJECTIVE = "derived_from_adjective"


class LexiconError(Exception):
    """Base class for lexical backend failures."""


class LexiconUnavailableError(LexiconError):
    """Raised when a backend cannot be initialised (missing data, bad config)."""


class LexiconLookupError(LexiconError):
    """Raised when a single lookup fails."""


class Synset(Protocol):
    """A meaning node: gloss, member senses and semantic relations."""

    @property
    def name(self) -> str: ...

    @property
    def gloss(self) -> str: ...

    @property
    def senses(self) -> Sequence["Sense"]: ...

    def relations(self, relation: SemanticRelation) -> List["Synset"]: ...


class Sense(Protocol):
    """One meaning of a lemma, tied to its synset."""

    @property
    def lemma(self) -> str: ...

    @property
    def pos(self) -> PosCategory: ...

    @property
    def synset(self) -> Synset: ...

    def lexical_relations(self, relation: LexicalRelation) -> List["Sense"]: ...


class LexicalBackend(Protocol):
    """Narrow query interface over a lexical knowledge base."""

    def lookup(self, term: str, pos: Optional[PosCategory] = None) -> List[Sense]: ...
