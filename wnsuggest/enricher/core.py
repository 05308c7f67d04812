"""
Core data structures for the enrichment engine.

Contains the output policy, lookup result types, candidate records and the
per-document context that is passed explicitly from stage to stage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..document import AnnotationSet, Document, Span
from ..lexicon import PosCategory, Sense

# Tag prefixes (Penn Treebank style) mapped to WordNet categories.
DEFAULT_POS_TAG_PREFIXES: Dict[str, str] = {
    "NN": "noun",
    "JJ": "adjective",
    "VB": "verb",
    "RB": "adverb",
}


class OutputFormat(Enum):
    """How a relation list is stored as a feature value."""

    STRING = "string"  # "[a, b, c]"
    LIST = "list"  # ["a", "b", "c"]


@dataclass(frozen=True)
class OutputPolicy:
    """
    Output serialisation policy.

    Attributes:
        list_format: Structured list or bracketed string
        phonetic: Optional phonetic encoder applied to the looked-up term
        phonetic_name: Registered name of that encoder, for logging
    """

    list_format: OutputFormat = OutputFormat.STRING
    phonetic: Optional[Callable[[str], str]] = None
    phonetic_name: Optional[str] = None

    def render(self, values: List[str]) -> Union[str, List[str]]:
        """Serialise a relation list. Order and duplicates are preserved."""
        if self.list_format is OutputFormat.LIST:
            return list(values)
        return "[" + ", ".join(values) + "]"


@dataclass(frozen=True)
class AcceptedSense:
    """A sense accepted by the resolver, with the POS categories whose rules apply."""

    sense: Sense
    categories: Tuple[PosCategory, ...]


@dataclass(frozen=True)
class Matched:
    """Lookup that produced at least one accepted sense."""

    term: str
    senses: Tuple[AcceptedSense, ...]
    backend_hits: int

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NoMatch:
    """
    Lookup with no accepted sense.

    ``backend_hits`` counts senses the backend returned before filtering and
    bounding; ``error`` carries the message of a failed lookup.
    """

    term: str
    backend_hits: int = 0
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return False


LookupResult = Union[Matched, NoMatch]


@dataclass
class Candidate:
    """
    A span selected for enrichment.

    ``term`` is None when missing-feature suppression left the span without a
    term; ``from_feature`` tells whether the term came from a span feature or
    from the document text.
    """

    span: Span
    term: Optional[str]
    from_feature: bool
    tokens: List[Span] = field(default_factory=list)


@dataclass
class EnrichmentStats:
    """Counters gathered while enriching one or more documents."""

    spans_seen: int = 0
    spans_excluded: int = 0
    spans_gated: int = 0
    lookups: int = 0
    lookups_matched: int = 0
    lookups_failed: int = 0
    senses_accepted: int = 0
    annotations_created: int = 0
    features_written: int = 0
    skipped: bool = False

    def merge(self, other: "EnrichmentStats"):
        for name in (
            "spans_seen",
            "spans_excluded",
            "spans_gated",
            "lookups",
            "lookups_matched",
            "lookups_failed",
            "senses_accepted",
            "annotations_created",
            "features_written",
        ):
            setattr(self, name, getattr(self, name) + getattr(other, name))
        self.skipped = self.skipped or other.skipped


@dataclass
class EnrichmentContext:
    """
    Per-document state handed to each stage.

    Stages read and write annotation sets only through this value; the
    engine itself keeps no per-document state.
    """

    document: Document
    input_set: AnnotationSet
    output_set: AnnotationSet
    token_set: AnnotationSet
    stats: EnrichmentStats = field(default_factory=EnrichmentStats)
