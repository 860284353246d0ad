"""Embedding abstractions, the OpenAI provider and a deterministic baseline."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from hashlib import blake2b
from math import sqrt
from typing import Any

from langchain_openai import OpenAIEmbeddings

from llm_demos.config import DemoSettings

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Embedder interface used by ingest and query components."""

    @abstractmethod
    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed many documents in one batch, preserving order."""

    @abstractmethod
    def embed_query(self, text: str) -> list[float]:
        """Embed one query."""


class OpenAIEmbedder(Embedder):
    """OpenAI embeddings through LangChain.

    Provider errors are not caught here; a failed batch surfaces to the caller.
    """

    def __init__(
        self,
        *,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model
        self._client = client or OpenAIEmbeddings(model=model, api_key=api_key)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        logger.debug("Embedding %d texts with %s", len(texts), self.model)
        return self._client.embed_documents(texts)

    def embed_query(self, text: str) -> list[float]:
        return self._client.embed_query(text)


class HashingEmbedder(Embedder):
    """Deterministic sparse-like embedding without external model calls.

    Used by tests that must not reach an embedding provider.
    """

    def __init__(self, dimension: int = 256) -> None:
        self.dimension = dimension

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._embed(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._embed(text)

    def _embed(self, text: str) -> list[float]:
        vector = [0.0 for _ in range(self.dimension)]
        tokens = text.lower().split()
        if not tokens:
            return vector

        for token in tokens:
            digest = blake2b(token.encode("utf-8"), digest_size=8).digest()
            idx = int.from_bytes(digest[:4], "little") % self.dimension
            sign = -1.0 if digest[4] % 2 else 1.0
            vector[idx] += sign

        norm = sqrt(sum(value * value for value in vector))
        if norm == 0:
            return vector
        return [value / norm for value in vector]


def create_embedder(settings: DemoSettings) -> OpenAIEmbedder:
    """Build the OpenAI embedder; a missing API key fails in the OpenAI client."""

    return OpenAIEmbedder(model=settings.embedding_model, api_key=settings.openai_api_key)
