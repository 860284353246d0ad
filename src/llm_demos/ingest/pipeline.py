"""End-to-end ingest pipeline: load -> embed -> store."""

from __future__ import annotations

import logging
from pathlib import Path

from llm_demos.config import MetadataConfig
from llm_demos.ingest.embedder import Embedder
from llm_demos.ingest.loader import LineLoader
from llm_demos.obs.tracing import Timer
from llm_demos.retrieval.vector_store import VectorStore
from llm_demos.types import TextRecord

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Coordinates loader/embedder/vector store stages.

    Each call embeds its records as a single batch; there is no retry, so a
    provider failure aborts the batch and propagates.
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        loader: LineLoader | None = None,
    ) -> None:
        self._embedder = embedder
        self._vector_store = vector_store
        self._loader = loader or LineLoader()

    def ingest_records(self, records: list[TextRecord]) -> list[str]:
        """Embed and store records, returning the created entry ids."""

        if not records:
            return []

        with Timer() as timer:
            vectors = self._embedder.embed_documents([record.content for record in records])
        logger.debug("Embedded %d records in %.1f ms", len(records), timer.elapsed_ms)

        return self._vector_store.add_all(vectors, records)

    def ingest_file(self, path: str | Path, metadata: MetadataConfig) -> list[TextRecord]:
        """Ingest a single text file and return the stored records."""

        records = self._loader.load(path, metadata)
        self.ingest_records(records)
        return records
