"""Ingest two text files with author metadata, then search them interactively."""

from __future__ import annotations

from llm_demos.cli.console import ConsolePort, StdConsole
from llm_demos.cli.search_session import SearchSession
from llm_demos.config import DemoSettings, MetadataConfig, SearchConfig
from llm_demos.ingest.embedder import Embedder, create_embedder
from llm_demos.ingest.pipeline import IngestPipeline
from llm_demos.obs.logger import configure_logging
from llm_demos.retrieval.vector_store import InMemoryVectorStore

SOURCES: tuple[tuple[str, MetadataConfig], ...] = (
    ("history_of_music.txt", MetadataConfig(author="John", category="hobby")),
    ("history_of_tomatoes.txt", MetadataConfig(author="Mary", category="food")),
)


def build_store(settings: DemoSettings, embedder: Embedder) -> InMemoryVectorStore:
    store = InMemoryVectorStore()
    pipeline = IngestPipeline(embedder, store)
    for filename, metadata in SOURCES:
        pipeline.ingest_file(settings.resources_dir / filename, metadata)
    return store


def main(
    console: ConsolePort | None = None,
    settings: DemoSettings | None = None,
    embedder: Embedder | None = None,
) -> int:
    settings = settings or DemoSettings.from_env()
    configure_logging(settings.log_level)

    embedder = embedder or create_embedder(settings)
    store = build_store(settings, embedder)

    session = SearchSession(console or StdConsole(), embedder, store, SearchConfig())
    session.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
