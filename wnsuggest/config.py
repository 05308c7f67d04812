"""
Configuration for the WordNet suggester.

SuggesterConfig carries every recognised option with defaults matching the
classic WordNet suggester plugin. It can be built from a plain dictionary or
loaded from a JSON file; invalid values raise ValueError before any document
is processed.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from .enricher.core import DEFAULT_POS_TAG_PREFIXES, OutputFormat
from .enricher.phonetic import get_encoder
from .lexicon import PosCategory

logger = logging.getLogger(__name__)


# pylint: disable=too-many-instance-attributes
@dataclass
class SuggesterConfig:
    """Options recognised by the enrichment engine."""

    input_as_name: str = ""
    output_as_name: str = ""
    input_as_types: List[str] = field(default_factory=lambda: ["Token"])
    input_as_type_features: List[str] = field(default_factory=lambda: ["string"])
    tok_as_name: str = ""
    tok_name: str = "Token"
    tok_root: str = "string"
    tok_category: str = "category"
    tok_kind_feature: Optional[str] = "kind"
    tok_kind_value: Optional[str] = "word"
    shortest_word: int = 4
    match_pos: bool = True
    attempt_full_match: bool = False
    ignore_missing_input_feature: bool = False
    add_gloss: bool = False
    output_full_hypernym_hierarchy: bool = False
    max_hypernym_depth: Optional[int] = None
    output_as_type: Optional[str] = None
    output_list_format: OutputFormat = OutputFormat.STRING
    truncate_size: int = 4
    exclude_if_within: List[str] = field(default_factory=list)
    exclude_if_contains: List[str] = field(default_factory=list)
    phrase_joiner: str = "_"
    phonetic_encoding: Optional[str] = None
    pos_tag_prefixes: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_POS_TAG_PREFIXES)
    )

    def __post_init__(self):
        if isinstance(self.output_list_format, str):
            try:
                self.output_list_format = OutputFormat(self.output_list_format.lower())
            except ValueError as e:
                raise ValueError(
                    f"Unknown output_list_format {self.output_list_format!r}; "
                    f"expected one of {[f.value for f in OutputFormat]}"
                ) from e
        for name in ("shortest_word", "truncate_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        if self.max_hypernym_depth is not None and (
            isinstance(self.max_hypernym_depth, bool)
            or not isinstance(self.max_hypernym_depth, int)
            or self.max_hypernym_depth < 1
        ):
            raise ValueError(
                f"max_hypernym_depth must be a positive integer or null, "
                f"got {self.max_hypernym_depth!r}"
            )
        for name in (
            "input_as_types",
            "input_as_type_features",
            "exclude_if_within",
            "exclude_if_contains",
        ):
            value = getattr(self, name)
            if value is None:
                setattr(self, name, [])
            elif not isinstance(value, list) or not all(
                isinstance(v, str) for v in value
            ):
                raise ValueError(f"{name} must be a list of strings, got {value!r}")
        for name in (
            "match_pos",
            "attempt_full_match",
            "ignore_missing_input_feature",
            "add_gloss",
            "output_full_hypernym_hierarchy",
        ):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean, got {getattr(self, name)!r}")
        if not isinstance(self.pos_tag_prefixes, dict):
            raise ValueError("pos_tag_prefixes must map tag prefixes to POS names")
        # Fail early on unknown POS names in the tag table
        self.pos_table()
        if self.phonetic_encoding is not None:
            get_encoder(self.phonetic_encoding)

    def pos_table(self) -> Dict[str, PosCategory]:
        """The tag-prefix table with POS names resolved to categories."""
        try:
            return {
                prefix: PosCategory.from_name(name)
                for prefix, name in self.pos_tag_prefixes.items()
            }
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid pos_tag_prefixes entry: {e}") from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SuggesterConfig":
        """Build a config from a dictionary, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["output_list_format"] = self.output_list_format.value
        return data


def load_config(path: str) -> SuggesterConfig:
    """Load a SuggesterConfig from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    config = SuggesterConfig.from_dict(data)
    logger.debug("Loaded configuration from %s", path)
    return config
