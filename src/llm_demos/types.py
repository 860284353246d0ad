"""Shared domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class TextRecord:
    """One non-blank input line with its fixed metadata."""

    content: str
    metadata: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True, slots=True)
class StoredEntry:
    """A vector held by the index together with the record it was computed from."""

    entry_id: str
    vector: list[float]
    record: TextRecord


@dataclass(frozen=True, slots=True)
class EqualityFilter:
    """Matches records whose metadata `key` equals `value`."""

    key: str
    value: str

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return metadata.get(self.key) == self.value


@dataclass(frozen=True, slots=True)
class SearchRequest:
    query_embedding: list[float]
    min_score: float = 0.0
    max_results: int = 3
    filter: EqualityFilter | None = None


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A retrieval hit with a relevance score in [0, 1]."""

    score: float
    record: TextRecord
    entry_id: str = ""


@dataclass(slots=True)
class ChatResponse:
    """Full text of a completed streamed chat response."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)
