"""
Enrichment engine package - the stages of the WordNet suggester pipeline.

- core: Core data structures (OutputPolicy, Matched/NoMatch, EnrichmentContext)
- candidates: Span selection, exclusion filters and term derivation
- matching: Full-phrase and per-word/per-token lookup planning
- senses: Backend lookup, POS filtering and sense bounding
- relations: Relation rule tables and bounded relation collection
- output: Merge-mode and create-mode feature writing
- phonetic: Phonetic encoders for the optional phonetic feature
"""

from .candidates import CandidateExtractor
from .core import (
    AcceptedSense,
    Candidate,
    EnrichmentContext,
    EnrichmentStats,
    LookupResult,
    Matched,
    NoMatch,
    OutputFormat,
    OutputPolicy,
)
from .matching import MatchingStrategy
from .output import OutputShaper
from .phonetic import available_encoders, get_encoder, register_encoder, soundex
from .relations import RelationAggregator, RelationRule, SenseRelations
from .senses import SenseResolver

__all__ = [
    "AcceptedSense",
    "Candidate",
    "CandidateExtractor",
    "EnrichmentContext",
    "EnrichmentStats",
    "LookupResult",
    "Matched",
    "MatchingStrategy",
    "NoMatch",
    "OutputFormat",
    "OutputPolicy",
    "OutputShaper",
    "RelationAggregator",
    "RelationRule",
    "SenseRelations",
    "SenseResolver",
    "available_encoders",
    "get_encoder",
    "register_encoder",
    "soundex",
]
