"""
In-memory lexical backend.

A small WordNet-shaped lexicon that can be built programmatically or loaded
from JSON. Used for tests, for custom vocabularies and as the CLI backend when
a lexicon file is given instead of the NLTK corpus.

JSON layout::

    {
      "synsets": [
        {"name": "dog.n.01", "pos": "noun", "gloss": "...",
         "lemmas": ["dog", "domestic_dog"],
         "relations": {"hypernym": ["canine.n.02"]}}
      ],
      "lexical_relations": [
        {"source": ["good.a.01", "good"], "relation": "antonym",
         "target": ["bad.a.01", "bad"]}
      ]
    }
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .types import (
    LexicalRelation,
    LexiconLookupError,
    LexiconUnavailableError,
    PosCategory,
    SemanticRelation,
)

logger = logging.getLogger(__name__)


class MemorySynset:
    """Synset node held by an InMemoryLexicon."""

    def __init__(self, name: str, pos: PosCategory, gloss: str = ""):
        self._name = name
        self._pos = pos
        self._gloss = gloss
        self._senses: List["MemorySense"] = []
        self._relations: Dict[SemanticRelation, List["MemorySynset"]] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def pos(self) -> PosCategory:
        return self._pos

    @property
    def gloss(self) -> str:
        return self._gloss

    @property
    def senses(self) -> List["MemorySense"]:
        return list(self._senses)

    def relations(self, relation: SemanticRelation) -> List["MemorySynset"]:
        return list(self._relations.get(relation, ()))

    def __repr__(self) -> str:
        return f"MemorySynset({self._name!r})"


class MemorySense:
    """A (lemma, synset) pair held by an InMemoryLexicon."""

    def __init__(self, lemma: str, synset: MemorySynset):
        self._lemma = lemma
        self._synset = synset
        self._relations: Dict[LexicalRelation, List["MemorySense"]] = {}

    @property
    def lemma(self) -> str:
        return self._lemma

    @property
    def pos(self) -> PosCategory:
        return self._synset.pos

    @property
    def synset(self) -> MemorySynset:
        return self._synset

    def lexical_relations(self, relation: LexicalRelation) -> List["MemorySense"]:
        return list(self._relations.get(relation, ()))

    def __repr__(self) -> str:
        return f"MemorySense({self._synset.name!r}, {self._lemma!r})"


class InMemoryLexicon:
    """
    Lexical backend backed by plain Python objects.

    Lookup is case-insensitive on the lemma and returns senses in the order
    their synsets were added.
    """

    def __init__(self):
        self._synsets: Dict[str, MemorySynset] = {}
        self._index: Dict[str, List[MemorySense]] = {}

    def __len__(self) -> int:
        return len(self._synsets)

    def add_synset(
        self,
        name: str,
        pos: PosCategory,
        lemmas: Iterable[str],
        gloss: str = "",
    ) -> MemorySynset:
        """Add a synset with its member lemmas. Names must be unique."""
        if name in self._synsets:
            raise ValueError(f"Duplicate synset name: {name}")
        synset = MemorySynset(name, pos, gloss)
        for lemma in lemmas:
            sense = MemorySense(lemma, synset)
            synset._senses.append(sense)  # pylint: disable=protected-access
            self._index.setdefault(lemma.lower(), []).append(sense)
        self._synsets[name] = synset
        return synset

    def synset(self, name: str) -> MemorySynset:
        try:
            return self._synsets[name]
        except KeyError as e:
            raise LexiconLookupError(f"Unknown synset: {name}") from e

    def sense(self, synset_name: str, lemma: str) -> MemorySense:
        for sense in self.synset(synset_name).senses:
            if sense.lemma == lemma:
                return sense
        raise LexiconLookupError(f"Synset {synset_name} has no lemma {lemma!r}")

    def relate(
        self, source: str, relation: SemanticRelation, *targets: str
    ) -> None:
        """Add directed semantic edges from ``source`` to each target synset."""
        edges = self.synset(source)._relations  # pylint: disable=protected-access
        for target in targets:
            edges.setdefault(relation, []).append(self.synset(target))

    def relate_senses(
        self,
        source: Tuple[str, str],
        relation: LexicalRelation,
        target: Tuple[str, str],
    ) -> None:
        """Add a directed lexical edge between two (synset name, lemma) senses."""
        src = self.sense(*source)
        src._relations.setdefault(relation, []).append(  # pylint: disable=protected-access
            self.sense(*target)
        )

    def lookup(
        self, term: str, pos: Optional[PosCategory] = None
    ) -> List[MemorySense]:
        senses = self._index.get(term.lower(), [])
        if pos is not None:
            senses = [s for s in senses if s.pos is pos]
        return list(senses)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryLexicon":
        """Build a lexicon from its JSON dictionary form."""
        if not isinstance(data, dict):
            raise LexiconUnavailableError("Lexicon data must be a JSON object")
        lexicon = cls()
        pending_edges = []
        try:
            for entry in data.get("synsets", []):
                lexicon.add_synset(
                    entry["name"],
                    PosCategory.from_name(entry.get("pos", "noun")),
                    entry.get("lemmas", []),
                    entry.get("gloss", ""),
                )
                for rel_name, targets in entry.get("relations", {}).items():
                    pending_edges.append(
                        (entry["name"], SemanticRelation(rel_name), targets)
                    )
            # Edges may point forward, so wire them once every synset exists
            for source, relation, targets in pending_edges:
                lexicon.relate(source, relation, *targets)
            for edge in data.get("lexical_relations", []):
                lexicon.relate_senses(
                    tuple(edge["source"]),
                    LexicalRelation(edge["relation"]),
                    tuple(edge["target"]),
                )
        except (KeyError, TypeError, ValueError, LexiconLookupError) as e:
            raise LexiconUnavailableError(f"Invalid lexicon data: {e}") from e

        logger.debug("Built in-memory lexicon with %s synsets", len(lexicon))
        return lexicon


def load_lexicon(path: str) -> InMemoryLexicon:
    """Load an InMemoryLexicon from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise LexiconUnavailableError(f"Failed to load lexicon from {path}: {e}") from e
    return InMemoryLexicon.from_dict(data)
