"""
Shared fixtures for the suggester tests.

Lexicons are built in memory; CountingLexicon wraps a backend and records
every lookup so tests can assert which terms reached it.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from wnsuggest.document import Document
from wnsuggest.lexicon import (
    InMemoryLexicon,
    LexicalRelation,
    LexiconLookupError,
    PosCategory,
    SemanticRelation,
)


class CountingLexicon:
    """Backend wrapper recording (term, pos) for every lookup."""

    def __init__(self, backend, fail_on=()):
        self.backend = backend
        self.calls = []
        self.fail_on = set(fail_on)

    def lookup(self, term, pos=None):
        self.calls.append((term, pos))
        if term in self.fail_on:
            raise LexiconLookupError(f"lookup of {term} failed")
        return self.backend.lookup(term, pos)

    @property
    def terms(self):
        return [term for term, _ in self.calls]


def build_dog_lexicon() -> InMemoryLexicon:
    """dog: one noun sense with synonym canine, hypernym animal, hyponym puppy."""
    lex = InMemoryLexicon()
    lex.add_synset("dog.n.01", PosCategory.NOUN, ["dog", "canine"], "a domestic animal")
    lex.add_synset("animal.n.01", PosCategory.NOUN, ["animal"])
    lex.add_synset("puppy.n.01", PosCategory.NOUN, ["puppy"])
    lex.add_synset("dog.v.01", PosCategory.VERB, ["dog", "tail"], "go after")
    lex.relate("dog.n.01", SemanticRelation.HYPERNYM, "animal.n.01")
    lex.relate("dog.n.01", SemanticRelation.HYPONYM, "puppy.n.01")
    lex.relate("animal.n.01", SemanticRelation.HYPONYM, "dog.n.01")
    return lex


def build_hierarchy_lexicon() -> InMemoryLexicon:
    """dog -> canine -> animal -> organism, each a separate synset."""
    lex = InMemoryLexicon()
    lex.add_synset("dog.n.01", PosCategory.NOUN, ["dog"])
    lex.add_synset("canine.n.01", PosCategory.NOUN, ["canine", "canid"])
    lex.add_synset("animal.n.01", PosCategory.NOUN, ["animal", "beast"])
    lex.add_synset("organism.n.01", PosCategory.NOUN, ["organism"])
    lex.relate("dog.n.01", SemanticRelation.HYPERNYM, "canine.n.01")
    lex.relate("canine.n.01", SemanticRelation.HYPERNYM, "animal.n.01")
    lex.relate("animal.n.01", SemanticRelation.HYPERNYM, "organism.n.01")
    return lex


def build_adjective_lexicon() -> InMemoryLexicon:
    """hot: adjective with similar-to, antonym and derived-from-adjective edges."""
    lex = InMemoryLexicon()
    lex.add_synset("hot.a.01", PosCategory.ADJECTIVE, ["hot"])
    lex.add_synset("cold.a.01", PosCategory.ADJECTIVE, ["cold"])
    lex.add_synset("warm.a.01", PosCategory.ADJECTIVE, ["warm"])
    lex.add_synset("heat.n.01", PosCategory.NOUN, ["heat", "hotness"])
    lex.add_synset("temperature.n.01", PosCategory.NOUN, ["temperature"])
    lex.relate("hot.a.01", SemanticRelation.SIMILAR_TO, "warm.a.01")
    lex.relate("hot.a.01", SemanticRelation.ATTRIBUTE, "temperature.n.01")
    lex.relate_senses(("hot.a.01", "hot"), LexicalRelation.ANTONYM, ("cold.a.01", "cold"))
    lex.relate_senses(
        ("hot.a.01", "hot"),
        LexicalRelation.DERIVED_FROM_ADJECTIVE,
        ("heat.n.01", "heat"),
    )
    return lex


def token_document(text, tokens, set_name=""):
    """Document with one Token span per (start, end, category) triple."""
    doc = Document(text, name="test")
    aset = doc.annotations(set_name)
    for start, end, category in tokens:
        aset.add(
            "Token",
            start,
            end,
            {"string": text[start:end], "category": category, "kind": "word"},
        )
    return doc


@pytest.fixture
def dog_lexicon():
    return build_dog_lexicon()


@pytest.fixture
def hierarchy_lexicon():
    return build_hierarchy_lexicon()


@pytest.fixture
def adjective_lexicon():
    return build_adjective_lexicon()


@pytest.fixture
def counting_dog_lexicon():
    return CountingLexicon(build_dog_lexicon())
