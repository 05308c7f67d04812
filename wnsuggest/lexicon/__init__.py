"""
Lexical backend package.

- types: POS variant, relation vocabularies, backend protocols and errors
- memory: in-memory lexicon (programmatic or JSON)
- nltk_wordnet: adapter over the NLTK WordNet corpus reader
"""

from .memory import InMemoryLexicon, MemorySense, MemorySynset, load_lexicon
from .nltk_wordnet import NltkSense, NltkSynset, NltkWordNet
from .types import (
    LexicalBackend,
    LexicalRelation,
    LexiconError,
    LexiconLookupError,
    LexiconUnavailableError,
    PosCategory,
    SemanticRelation,
    Sense,
    Synset,
)

__all__ = [
    "InMemoryLexicon",
    "LexicalBackend",
    "LexicalRelation",
    "LexiconError",
    "LexiconLookupError",
    "LexiconUnavailableError",
    "MemorySense",
    "MemorySynset",
    "NltkSense",
    "NltkSynset",
    "NltkWordNet",
    "PosCategory",
    "SemanticRelation",
    "Sense",
    "Synset",
    "load_lexicon",
]
