"""
Relation aggregation for the enrichment engine.

Collects, for one accepted sense, the lemmas related to it under each relation
category (synonyms, antonyms, hypernyms, ...). Which relation types feed
which category, and which categories apply to which part of speech, is held
in rule tables rather than in branching code.

Every collection pass is bounded: a pass follows one relation type (or the
sibling members) and stops after ``truncate_size`` edges or ``truncate_size``
lemmas, keeping what it has. A category fed by several relation types is the
concatenation of their passes, each with its own budget. The
full hypernym hierarchy walk is bounded instead by a visited-synset set and
an optional depth cutoff.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..lexicon import LexicalRelation, PosCategory, SemanticRelation, Sense, Synset
from .core import AcceptedSense

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationRule:
    """
    One source of lemmas for a relation category.

    Attributes:
        category: Output category (feature name) fed by this rule
        semantic: Synset-level relation types followed from the sense's synset
        lexical: Sense-level relation types followed from the sense itself
        members: Emit the lemmas of the sense's sibling senses
        hierarchy: Eligible for the full hypernym hierarchy walk
    """

    category: str
    semantic: Tuple[SemanticRelation, ...] = ()
    lexical: Tuple[LexicalRelation, ...] = ()
    members: bool = False
    hierarchy: bool = False


CATEGORY_ORDER = (
    "synonyms",
    "derived",
    "verb_group",
    "antonyms",
    "hypernyms",
    "hyponyms",
    "meronyms",
    "holonyms",
    "attributes",
)

COMMON_RULES: Tuple[RelationRule, ...] = (
    RelationRule("synonyms", members=True),
    RelationRule(
        "antonyms",
        semantic=(SemanticRelation.ANTONYM,),
        lexical=(LexicalRelation.ANTONYM,),
    ),
    RelationRule("hypernyms", semantic=(SemanticRelation.HYPERNYM,), hierarchy=True),
    RelationRule("hyponyms", semantic=(SemanticRelation.HYPONYM,)),
    # Part, member and substance variants share one list
    RelationRule(
        "meronyms",
        semantic=(
            SemanticRelation.PART_MERONYM,
            SemanticRelation.MEMBER_MERONYM,
            SemanticRelation.SUBSTANCE_MERONYM,
        ),
    ),
    RelationRule(
        "holonyms",
        semantic=(
            SemanticRelation.PART_HOLONYM,
            SemanticRelation.MEMBER_HOLONYM,
            SemanticRelation.SUBSTANCE_HOLONYM,
        ),
    ),
    RelationRule("attributes", semantic=(SemanticRelation.ATTRIBUTE,)),
)

POS_RULES: Dict[PosCategory, Tuple[RelationRule, ...]] = {
    PosCategory.NOUN: (),
    PosCategory.VERB: (
        RelationRule("verb_group", semantic=(SemanticRelation.VERB_GROUP,)),
    ),
    PosCategory.ADJECTIVE: (
        RelationRule("synonyms", semantic=(SemanticRelation.SIMILAR_TO,)),
        RelationRule(
            "derived", lexical=(LexicalRelation.DERIVED_FROM_ADJECTIVE,)
        ),
    ),
    PosCategory.ADVERB: (),
}


def rules_for(categories: Iterable[PosCategory]) -> List[RelationRule]:
    """Rules that apply to a sense, ordered by output category."""
    rules = list(COMMON_RULES)
    for category in categories:
        for rule in POS_RULES.get(category, ()):
            if rule not in rules:
                rules.append(rule)
    # sort() is stable, so common rules stay ahead of POS extras per category
    rules.sort(key=lambda r: CATEGORY_ORDER.index(r.category))
    return rules


class BoundedList:
    """Output of one collection pass, with an edge budget and a lemma budget."""

    def __init__(self, bound: int):
        self.bound = bound
        self.values: List[str] = []
        self.edges = 0

    @property
    def full(self) -> bool:
        return len(self.values) >= self.bound

    def take_edge(self) -> bool:
        """Claim one relation edge; False once either budget is spent."""
        if self.edges >= self.bound or self.full:
            return False
        self.edges += 1
        return True

    def add(self, lemma: str) -> bool:
        if self.full:
            return False
        self.values.append(lemma)
        return True


@dataclass
class SenseRelations:
    """Relation data gathered for one accepted sense."""

    sense: Sense
    gloss: Optional[str] = None
    relations: Dict[str, List[str]] = field(default_factory=dict)


class RelationAggregator:
    """
    Gathers relation lists for accepted senses.

    Args:
        truncate_size: Edge and lemma budget of every collection pass
        full_hypernym_hierarchy: Walk every ancestor instead of direct hypernyms
        max_hypernym_depth: Optional level cutoff for the hierarchy walk
        add_gloss: Also report the synset gloss
    """

    def __init__(
        self,
        truncate_size: int = 4,
        full_hypernym_hierarchy: bool = False,
        max_hypernym_depth: Optional[int] = None,
        add_gloss: bool = False,
    ):
        self.truncate_size = truncate_size
        self.full_hypernym_hierarchy = full_hypernym_hierarchy
        self.max_hypernym_depth = max_hypernym_depth
        self.add_gloss = add_gloss

    def collect(self, accepted: AcceptedSense) -> SenseRelations:
        """Collect every non-empty relation list for one sense, in category order."""
        sense = accepted.sense
        synset = sense.synset
        result = SenseRelations(sense=sense)
        if self.add_gloss and synset.gloss:
            result.gloss = synset.gloss

        lists: Dict[str, List[str]] = {}
        hierarchy: Dict[str, List[str]] = {}
        for rule in rules_for(accepted.categories):
            if rule.hierarchy and self.full_hypernym_hierarchy:
                hierarchy[rule.category] = self.walk_hypernyms(synset)
                continue
            values = lists.setdefault(rule.category, [])
            if rule.members:
                bounded = BoundedList(self.truncate_size)
                self._collect_members(sense, bounded)
                values.extend(bounded.values)
            for relation in rule.semantic:
                bounded = BoundedList(self.truncate_size)
                self._collect_semantic(synset, relation, bounded)
                values.extend(bounded.values)
            for relation in rule.lexical:
                bounded = BoundedList(self.truncate_size)
                self._collect_lexical(sense, relation, bounded)
                values.extend(bounded.values)

        for category in CATEGORY_ORDER:
            values = hierarchy.get(category)
            if values is None:
                values = lists.get(category)
            if values:
                result.relations[category] = values
        return result

    @staticmethod
    def _collect_members(sense: Sense, bounded: BoundedList):
        for member in sense.synset.senses:
            if member == sense:
                continue
            if not bounded.add(member.lemma):
                return

    @staticmethod
    def _collect_semantic(
        synset: Synset, relation: SemanticRelation, bounded: BoundedList
    ):
        for target in synset.relations(relation):
            if not bounded.take_edge():
                return
            for member in target.senses:
                if not bounded.add(member.lemma):
                    return

    @staticmethod
    def _collect_lexical(
        sense: Sense, relation: LexicalRelation, bounded: BoundedList
    ):
        for target in sense.lexical_relations(relation):
            if not bounded.take_edge():
                return
            for member in target.synset.senses:
                if not bounded.add(member.lemma):
                    return

    def walk_hypernyms(self, synset: Synset) -> List[str]:
        """
        Lemmas of every ancestor of a synset, breadth first.

        Each synset is expanded at most once, so cyclic hypernym data ends the
        walk instead of looping. ``max_hypernym_depth`` caps the levels walked.
        """
        lemmas: List[str] = []
        visited = {synset.name}
        frontier = [synset]
        depth = 0
        while frontier:
            if self.max_hypernym_depth is not None and depth >= self.max_hypernym_depth:
                logger.debug(
                    "Hypernym walk from %s stopped at depth %s", synset.name, depth
                )
                break
            depth += 1
            next_frontier = []
            for node in frontier:
                for parent in node.relations(SemanticRelation.HYPERNYM):
                    if parent.name in visited:
                        logger.debug(
                            "Hypernym %s of %s already visited", parent.name, node.name
                        )
                        continue
                    visited.add(parent.name)
                    lemmas.extend(member.lemma for member in parent.senses)
                    next_frontier.append(parent)
            frontier = next_frontier
        return lemmas
