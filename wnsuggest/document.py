"""
Annotated document model.

A document is text plus named annotation sets. Each annotation (span) has
immutable offsets, a type and a mutable feature mapping. The enrichment
engine only reads spans, sets feature values and adds new spans; nothing here
deletes a span or moves its offsets.

JSON layout::

    {
      "text": "The dog barked.",
      "annotations": {
        "": [{"id": 0, "type": "Token", "start": 4, "end": 7,
              "features": {"string": "dog", "category": "NN", "kind": "word"}}]
      }
    }
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Span:
    """An annotation: offsets and type are fixed, features are mutable."""

    id: int
    type: str
    start: int
    end: int
    features: Dict[str, Any] = field(default_factory=dict)

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "start": self.start,
            "end": self.end,
            "features": dict(self.features),
        }


def _offset_key(span: Span):
    return span.start


class AnnotationSet:
    """A named set of spans with type, feature and offset-range queries."""

    def __init__(self, name: str, document: "Document"):
        self.name = name
        self._document = document
        self._spans: List[Span] = []

    def __iter__(self) -> Iterator[Span]:
        return iter(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def add(
        self,
        type_name: str,
        start: int,
        end: int,
        features: Optional[Dict[str, Any]] = None,
        span_id: Optional[int] = None,
    ) -> Span:
        """Create a span in this set. Offsets must lie within the document text."""
        if start < 0 or end < start or end > len(self._document.text):
            raise ValueError(
                f"Invalid offsets [{start}, {end}) for document of length "
                f"{len(self._document.text)}"
            )
        span = Span(
            id=self._document._claim_id(span_id),  # pylint: disable=protected-access
            type=type_name,
            start=start,
            end=end,
            features=dict(features or {}),
        )
        self._spans.append(span)
        return span

    def get(
        self,
        type_name: Optional[str] = None,
        constraints: Optional[Dict[str, str]] = None,
        required_features: Iterable[str] = (),
    ) -> List[Span]:
        """
        Select spans by type and features, in ascending start-offset order.

        Args:
            type_name: Span type to select, or None for every type
            constraints: Feature values a span must carry (compared as strings)
            required_features: Feature names a span must carry

        Returns:
            Matching spans, stably sorted by start offset
        """
        required = tuple(required_features)
        selected = []
        for span in self._spans:
            if type_name is not None and span.type != type_name:
                continue
            if any(name not in span.features for name in required):
                continue
            if constraints and any(
                name not in span.features or str(span.features[name]) != value
                for name, value in constraints.items()
            ):
                continue
            selected.append(span)
        return sorted(selected, key=_offset_key)

    def contained(
        self, start: int, end: int, type_name: Optional[str] = None
    ) -> List[Span]:
        """Spans lying within [start, end], inclusive of both offsets."""
        return [
            s
            for s in self.get(type_name)
            if s.start >= start and s.end <= end
        ]

    def covering(self, type_name: Optional[str], start: int, end: int) -> List[Span]:
        """Spans of the given type that cover [start, end]."""
        return [
            s
            for s in self.get(type_name)
            if s.start <= start and s.end >= end
        ]


class Document:
    """Text content plus named annotation sets. The default set is named ""."""

    def __init__(self, text: str, name: Optional[str] = None):
        self.text = text
        self.name = name
        self._sets: Dict[str, AnnotationSet] = {}
        self._used_ids: set = set()
        self._next_id = 0

    def _claim_id(self, requested: Optional[int]) -> int:
        if requested is not None:
            if requested in self._used_ids:
                raise ValueError(f"Duplicate annotation id: {requested}")
            span_id = requested
        else:
            while self._next_id in self._used_ids:
                self._next_id += 1
            span_id = self._next_id
        self._used_ids.add(span_id)
        return span_id

    def annotations(self, name: Optional[str] = None) -> AnnotationSet:
        """Get (creating if needed) the named set. Blank names mean the default set."""
        key = (name or "").strip()
        if key not in self._sets:
            self._sets[key] = AnnotationSet(key, self)
        return self._sets[key]

    @property
    def annotation_set_names(self) -> List[str]:
        return list(self._sets)

    def substring(self, start: int, end: int) -> str:
        return self.text[start:end]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"text": self.text}
        if self.name is not None:
            data["name"] = self.name
        data["annotations"] = {
            name: [span.to_dict() for span in sorted(aset, key=lambda s: s.id)]
            for name, aset in self._sets.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Build a document from its JSON dictionary form."""
        if not isinstance(data, dict) or not isinstance(data.get("text"), str):
            raise ValueError("Document data must be an object with a 'text' string")
        doc = cls(data["text"], name=data.get("name"))
        annotations = data.get("annotations", {})
        if not isinstance(annotations, dict):
            raise ValueError("'annotations' must map set names to span lists")
        for set_name, spans in annotations.items():
            aset = doc.annotations(set_name)
            for i, raw in enumerate(spans):
                try:
                    aset.add(
                        raw["type"],
                        int(raw["start"]),
                        int(raw["end"]),
                        raw.get("features") or {},
                        span_id=raw.get("id"),
                    )
                except (KeyError, TypeError) as e:
                    raise ValueError(
                        f"Invalid span at index {i} in set {set_name!r}: {raw}"
                    ) from e
        logger.debug(
            "Loaded document with %s annotation sets", len(doc.annotation_set_names)
        )
        return doc


def load_document(path: str) -> Document:
    with open(path, "r", encoding="utf-8") as f:
        return Document.from_dict(json.load(f))


def save_document(document: Document, path: str, indent: Optional[int] = None):
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        json.dump(document.to_dict(), f, indent=indent, ensure_ascii=False)
        f.write("\n")
