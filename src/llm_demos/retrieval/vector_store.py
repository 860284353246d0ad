"""Vector store interface and the LangChain in-memory adapter."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Protocol

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore as LangChainInMemoryVectorStore

from llm_demos.types import EqualityFilter, SearchRequest, SearchResult, StoredEntry, TextRecord

logger = logging.getLogger(__name__)


class VectorStore(Protocol):
    """Minimal request/response contract for the embedding index."""

    def add(self, vector: list[float], record: TextRecord) -> str:
        """Insert one vector and return its entry id."""

    def add_all(self, vectors: list[list[float]], records: list[TextRecord]) -> list[str]:
        """Insert vectors paired positionally with records."""

    def search(self, request: SearchRequest) -> list[SearchResult]:
        """Return filtered matches ordered by descending score."""


class _PrecomputedEmbeddings(Embeddings):
    """Hands vectors computed by the ingest pipeline to the LangChain store.

    Queries reach the store as vectors, so `embed_query` is never used.
    """

    def __init__(self) -> None:
        self._pending: list[list[float]] = []

    def stage(self, vectors: list[list[float]]) -> None:
        self._pending = [list(vector) for vector in vectors]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        vectors, self._pending = self._pending, []
        if len(vectors) != len(texts):
            raise ValueError("vectors and records must have the same length")
        return vectors

    def embed_query(self, text: str) -> list[float]:
        raise NotImplementedError("query embeddings are computed by the caller")


class InMemoryVectorStore:
    """Process-lifetime index backed by LangChain's `InMemoryVectorStore`.

    Entries are never evicted or rewritten once added. LangChain ranks by
    cosine similarity; scores are mapped onto [0, 1] before `min_score` applies.
    """

    def __init__(self) -> None:
        self._embeddings = _PrecomputedEmbeddings()
        self._store = LangChainInMemoryVectorStore(embedding=self._embeddings)
        self._entries: dict[str, StoredEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, vector: list[float], record: TextRecord) -> str:
        return self.add_all([vector], [record])[0]

    def add_all(self, vectors: list[list[float]], records: list[TextRecord]) -> list[str]:
        if len(vectors) != len(records):
            raise ValueError("vectors and records must have the same length")
        if not records:
            return []

        ids = [str(uuid.uuid4()) for _ in records]
        documents = [
            Document(page_content=record.content, metadata=dict(record.metadata))
            for record in records
        ]
        self._embeddings.stage(vectors)
        self._store.add_documents(documents, ids=ids)

        for entry_id, vector, record in zip(ids, vectors, records, strict=True):
            self._entries[entry_id] = StoredEntry(entry_id=entry_id, vector=list(vector), record=record)
        return ids

    def entries(self) -> list[StoredEntry]:
        return list(self._entries.values())

    def search(self, request: SearchRequest) -> list[SearchResult]:
        if not self._entries:
            return []

        hits = self._store.similarity_search_with_score_by_vector(
            embedding=request.query_embedding,
            k=request.max_results,
            filter=_document_filter(request.filter),
        )

        results: list[SearchResult] = []
        for document, cosine in hits:
            score = relevance_score(cosine)
            if score < request.min_score:
                continue
            entry = self._entries[str(document.id)]
            results.append(SearchResult(score=score, record=entry.record, entry_id=entry.entry_id))

        logger.debug(
            "Search returned %d of %d candidates (filter=%s)",
            len(results),
            len(hits),
            request.filter,
        )
        return results


def relevance_score(cosine: float) -> float:
    """Cosine similarity mapped from [-1, 1] onto [0, 1]."""

    score = (float(cosine) + 1.0) / 2.0
    return min(1.0, max(0.0, score))


def _document_filter(equality: EqualityFilter | None) -> Callable[[Document], bool] | None:
    if equality is None:
        return None

    def _matches(document: Document) -> bool:
        return equality.matches(document.metadata)

    return _matches
