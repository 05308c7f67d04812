"""
Tests for the lookup strategy: full-phrase first, per-word fallback for
feature-derived terms and per-token fallback for text-derived terms.
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import CountingLexicon
from wnsuggest.document import Document
from wnsuggest.enricher import Candidate, MatchingStrategy, SenseResolver
from wnsuggest.lexicon import InMemoryLexicon, PosCategory


def build_lexicon():
    lex = InMemoryLexicon()
    lex.add_synset("hot_dog.n.01", PosCategory.NOUN, ["hot_dog", "frank"])
    lex.add_synset("dog.n.01", PosCategory.NOUN, ["dog"])
    lex.add_synset("hot.a.01", PosCategory.ADJECTIVE, ["hot"])
    lex.add_synset("big.a.01", PosCategory.ADJECTIVE, ["big"])
    return lex


def phrase_doc():
    doc = Document("fresh hot dog")
    aset = doc.annotations()
    tokens = [
        aset.add("Token", 0, 5, {"string": "fresh", "category": "JJ"}),
        aset.add("Token", 6, 9, {"string": "hot", "category": "JJ"}),
        aset.add("Token", 10, 13, {"string": "dogs", "root": "dog", "category": "NN"}),
    ]
    phrase = aset.add("NP", 0, 13)
    return doc, phrase, tokens


def strategy(backend, **kwargs):
    return MatchingStrategy(SenseResolver(backend), **kwargs)


def test_split_words():
    assert MatchingStrategy.split_words("hot-dog stand,  now") == [
        "hot",
        "dog",
        "stand",
        "now",
    ]


def test_full_phrase_success_suppresses_fallback():
    counting = CountingLexicon(build_lexicon())
    doc = Document("hot dog")
    span = doc.annotations().add("NP", 0, 7)
    candidate = Candidate(span=span, term="hot dog", from_feature=True)
    results = list(strategy(counting, attempt_full_match=True).lookups(candidate))
    assert counting.terms == ["hot_dog"]
    assert len(results) == 1
    target, result = results[0]
    assert target is span
    assert result


def test_full_phrase_failure_falls_back_to_words():
    counting = CountingLexicon(build_lexicon())
    doc = Document("large dog house")
    span = doc.annotations().add("NP", 0, 15)
    candidate = Candidate(span=span, term="large dog house", from_feature=True)
    results = list(
        strategy(counting, attempt_full_match=True, shortest_word=3).lookups(candidate)
    )
    assert counting.terms == ["large_dog_house", "large", "dog", "house"]
    assert all(target is span for target, _ in results)
    assert [bool(r) for _, r in results] == [False, False, True, False]


def test_word_fallback_respects_shortest_word():
    counting = CountingLexicon(build_lexicon())
    doc = Document("big dog")
    span = doc.annotations().add("NP", 0, 7)
    candidate = Candidate(span=span, term="big dog", from_feature=True)
    list(strategy(counting, shortest_word=4).lookups(candidate))
    assert counting.terms == []


def test_token_fallback_uses_token_root():
    counting = CountingLexicon(build_lexicon())
    _, phrase, tokens = phrase_doc()
    candidate = Candidate(
        span=phrase, term="fresh hot dog", from_feature=False, tokens=tokens
    )
    results = list(
        strategy(counting, shortest_word=3, token_root="root").lookups(candidate)
    )
    # only the third token carries a root feature
    assert counting.terms == ["dog"]
    assert results[0][0] is tokens[2]


def test_suppressed_term_goes_straight_to_tokens():
    counting = CountingLexicon(build_lexicon())
    _, phrase, tokens = phrase_doc()
    candidate = Candidate(span=phrase, term=None, from_feature=False, tokens=tokens)
    results = list(
        strategy(counting, attempt_full_match=True, shortest_word=3).lookups(candidate)
    )
    assert counting.terms == ["fresh", "hot", "dogs"]
    assert [target for target, _ in results] == tokens


def test_full_phrase_counts_as_success_when_senses_filtered():
    counting = CountingLexicon(build_lexicon())
    doc = Document("hot dog")
    span = doc.annotations().add("NP", 0, 7, {"category": "VB"})
    candidate = Candidate(span=span, term="hot dog", from_feature=True)
    results = list(strategy(counting, attempt_full_match=True).lookups(candidate))
    assert counting.terms == ["hot_dog"]
    assert not results[0][1]
    assert results[0][1].backend_hits == 1
