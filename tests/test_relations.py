"""
Tests for relation aggregation: category rules per part of speech, the
per-pass budgets and the full hypernym hierarchy walk.
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import build_adjective_lexicon, build_dog_lexicon, build_hierarchy_lexicon
from wnsuggest.enricher import AcceptedSense, RelationAggregator
from wnsuggest.enricher.relations import CATEGORY_ORDER, rules_for
from wnsuggest.lexicon import (
    InMemoryLexicon,
    LexicalRelation,
    PosCategory,
    SemanticRelation,
)


def accepted(lex, synset_name, lemma):
    sense = lex.sense(synset_name, lemma)
    return AcceptedSense(sense=sense, categories=(sense.pos,))


def test_noun_relations():
    lex = build_dog_lexicon()
    result = RelationAggregator().collect(accepted(lex, "dog.n.01", "dog"))
    assert result.relations == {
        "synonyms": ["canine"],
        "hypernyms": ["animal"],
        "hyponyms": ["puppy"],
    }
    assert result.gloss is None


def test_gloss_only_when_enabled():
    lex = build_dog_lexicon()
    result = RelationAggregator(add_gloss=True).collect(
        accepted(lex, "dog.n.01", "dog")
    )
    assert result.gloss == "a domestic animal"


def test_adjective_rules():
    lex = build_adjective_lexicon()
    result = RelationAggregator().collect(accepted(lex, "hot.a.01", "hot"))
    assert result.relations == {
        "synonyms": ["warm"],
        "derived": ["heat", "hotness"],
        "antonyms": ["cold"],
        "attributes": ["temperature"],
    }
    assert list(result.relations) == [
        c for c in CATEGORY_ORDER if c in result.relations
    ]


def test_verb_group_only_for_verbs():
    lex = InMemoryLexicon()
    lex.add_synset("run.v.01", PosCategory.VERB, ["run"])
    lex.add_synset("run.v.02", PosCategory.VERB, ["run", "go"])
    lex.relate("run.v.01", SemanticRelation.VERB_GROUP, "run.v.02")
    lex.add_synset("run.n.01", PosCategory.NOUN, ["run"])
    lex.relate("run.n.01", SemanticRelation.VERB_GROUP, "run.v.02")
    aggregator = RelationAggregator()
    verb = aggregator.collect(accepted(lex, "run.v.01", "run"))
    noun = aggregator.collect(accepted(lex, "run.n.01", "run"))
    assert verb.relations == {"verb_group": ["run", "go"]}
    assert noun.relations == {}


def test_similar_to_ignored_for_nouns():
    lex = InMemoryLexicon()
    lex.add_synset("a.n.01", PosCategory.NOUN, ["a"])
    lex.add_synset("b.n.01", PosCategory.NOUN, ["b"])
    lex.relate("a.n.01", SemanticRelation.SIMILAR_TO, "b.n.01")
    assert RelationAggregator().collect(accepted(lex, "a.n.01", "a")).relations == {}


def test_rules_follow_every_category_of_sense():
    rules = rules_for([PosCategory.VERB, PosCategory.ADJECTIVE])
    categories = [r.category for r in rules]
    assert "verb_group" in categories
    assert "derived" in categories
    assert categories == sorted(categories, key=CATEGORY_ORDER.index)


def test_collapsed_meronyms_and_holonyms():
    lex = InMemoryLexicon()
    lex.add_synset("car.n.01", PosCategory.NOUN, ["car"])
    lex.add_synset("wheel.n.01", PosCategory.NOUN, ["wheel"])
    lex.add_synset("fleet.n.01", PosCategory.NOUN, ["fleet"])
    lex.add_synset("steel.n.01", PosCategory.NOUN, ["steel"])
    lex.add_synset("traffic.n.01", PosCategory.NOUN, ["traffic"])
    lex.relate("car.n.01", SemanticRelation.PART_MERONYM, "wheel.n.01")
    lex.relate("car.n.01", SemanticRelation.SUBSTANCE_MERONYM, "steel.n.01")
    lex.relate("car.n.01", SemanticRelation.MEMBER_HOLONYM, "fleet.n.01")
    lex.relate("car.n.01", SemanticRelation.PART_HOLONYM, "traffic.n.01")
    result = RelationAggregator().collect(accepted(lex, "car.n.01", "car"))
    assert result.relations["meronyms"] == ["wheel", "steel"]
    assert result.relations["holonyms"] == ["traffic", "fleet"]


def test_lists_are_bounded():
    lex = InMemoryLexicon()
    lex.add_synset("x.n.01", PosCategory.NOUN, ["x"] + [f"syn{i}" for i in range(10)])
    for i in range(10):
        lex.add_synset(f"h{i}.n.01", PosCategory.NOUN, [f"h{i}a", f"h{i}b", f"h{i}c"])
        lex.relate("x.n.01", SemanticRelation.HYPONYM, f"h{i}.n.01")
    result = RelationAggregator(truncate_size=4).collect(accepted(lex, "x.n.01", "x"))
    assert result.relations["synonyms"] == ["syn0", "syn1", "syn2", "syn3"]
    # partial results are kept once the lemma budget runs out mid-edge
    assert result.relations["hyponyms"] == ["h0a", "h0b", "h0c", "h1a"]


def test_zero_bound_writes_nothing():
    lex = build_dog_lexicon()
    result = RelationAggregator(truncate_size=0).collect(
        accepted(lex, "dog.n.01", "dog")
    )
    assert result.relations == {}


def test_each_relation_type_has_its_own_budget():
    lex = InMemoryLexicon()
    lex.add_synset("x.n.01", PosCategory.NOUN, ["x"])
    for i in range(6):
        lex.add_synset(f"p{i}.n.01", PosCategory.NOUN, [f"p{i}"])
        lex.relate("x.n.01", SemanticRelation.PART_MERONYM, f"p{i}.n.01")
    lex.add_synset("m0.n.01", PosCategory.NOUN, ["m0"])
    lex.add_synset("s0.n.01", PosCategory.NOUN, ["s0"])
    lex.relate("x.n.01", SemanticRelation.MEMBER_MERONYM, "m0.n.01")
    lex.relate("x.n.01", SemanticRelation.SUBSTANCE_MERONYM, "s0.n.01")
    result = RelationAggregator(truncate_size=4).collect(accepted(lex, "x.n.01", "x"))
    assert result.relations["meronyms"] == ["p0", "p1", "p2", "p3", "m0", "s0"]


def test_antonyms_join_synset_and_sense_level():
    lex = InMemoryLexicon()
    lex.add_synset("up.a.01", PosCategory.ADJECTIVE, ["up"])
    lex.add_synset("down.a.01", PosCategory.ADJECTIVE, ["down", "downward"])
    lex.add_synset("low.a.01", PosCategory.ADJECTIVE, ["low"])
    lex.relate("up.a.01", SemanticRelation.ANTONYM, "down.a.01")
    lex.relate_senses(("up.a.01", "up"), LexicalRelation.ANTONYM, ("low.a.01", "low"))
    result = RelationAggregator(truncate_size=1).collect(accepted(lex, "up.a.01", "up"))
    assert result.relations["antonyms"] == ["down", "low"]


def test_direct_hypernyms_only_by_default():
    lex = build_hierarchy_lexicon()
    result = RelationAggregator().collect(accepted(lex, "dog.n.01", "dog"))
    assert result.relations["hypernyms"] == ["canine", "canid"]


def test_full_hierarchy_in_traversal_order():
    lex = build_hierarchy_lexicon()
    result = RelationAggregator(full_hypernym_hierarchy=True).collect(
        accepted(lex, "dog.n.01", "dog")
    )
    assert result.relations["hypernyms"] == [
        "canine",
        "canid",
        "animal",
        "beast",
        "organism",
    ]


def test_full_hierarchy_depth_cutoff():
    lex = build_hierarchy_lexicon()
    aggregator = RelationAggregator(full_hypernym_hierarchy=True, max_hypernym_depth=2)
    result = aggregator.collect(accepted(lex, "dog.n.01", "dog"))
    assert result.relations["hypernyms"] == ["canine", "canid", "animal", "beast"]


def test_full_hierarchy_terminates_on_cycle(caplog):
    lex = build_hierarchy_lexicon()
    lex.relate("organism.n.01", SemanticRelation.HYPERNYM, "dog.n.01")
    lex.relate("animal.n.01", SemanticRelation.HYPERNYM, "canine.n.01")
    with caplog.at_level("DEBUG"):
        lemmas = RelationAggregator(full_hypernym_hierarchy=True).walk_hypernyms(
            lex.synset("dog.n.01")
        )
    assert lemmas == ["canine", "canid", "animal", "beast", "organism"]
    assert any("already visited" in r.getMessage() for r in caplog.records)


def test_shared_ancestor_visited_once():
    lex = InMemoryLexicon()
    lex.add_synset("mule.n.01", PosCategory.NOUN, ["mule"])
    lex.add_synset("horse.n.01", PosCategory.NOUN, ["horse"])
    lex.add_synset("donkey.n.01", PosCategory.NOUN, ["donkey"])
    lex.add_synset("equine.n.01", PosCategory.NOUN, ["equine"])
    lex.relate("mule.n.01", SemanticRelation.HYPERNYM, "horse.n.01", "donkey.n.01")
    lex.relate("horse.n.01", SemanticRelation.HYPERNYM, "equine.n.01")
    lex.relate("donkey.n.01", SemanticRelation.HYPERNYM, "equine.n.01")
    lemmas = RelationAggregator(full_hypernym_hierarchy=True).walk_hypernyms(
        lex.synset("mule.n.01")
    )
    assert lemmas == ["horse", "donkey", "equine"]
