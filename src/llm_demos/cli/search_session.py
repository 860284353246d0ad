"""Interactive filtered similarity search over the in-memory index."""

from __future__ import annotations

import logging

from llm_demos.cli.console import ConsolePort
from llm_demos.config import SearchConfig
from llm_demos.ingest.embedder import Embedder
from llm_demos.obs.tracing import Timer
from llm_demos.retrieval.vector_store import VectorStore
from llm_demos.types import EqualityFilter, SearchRequest, SearchResult

logger = logging.getLogger(__name__)


class SearchSession:
    """Blocking prompt loop: query, author filter, filtered search, print."""

    def __init__(
        self,
        console: ConsolePort,
        embedder: Embedder,
        vector_store: VectorStore,
        config: SearchConfig | None = None,
    ) -> None:
        self.console = console
        self.embedder = embedder
        self.vector_store = vector_store
        self.config = config or SearchConfig()

    def run(self) -> int:
        """Run until an exit keyword or end of input; return the search count."""

        searches = 0
        while True:
            try:
                question = self.console.read_line(self.config.query_prompt)
            except EOFError:
                break
            if self.is_exit(question):
                break

            query_embedding = self.embedder.embed_query(question)

            try:
                user_filter = self.console.read_line(self.config.filter_prompt)
            except EOFError:
                break
            # Only the query is checked for exit keywords here; a filter value
            # such as "exit" is searched as an author name.
            if self.is_exit(question):
                break

            results = self.search(query_embedding, user_filter)
            searches += 1
            for result in results:
                self.console.write_line(format_result(result))

        logger.info("Search session ended after %d searches", searches)
        return searches

    def search(self, query_embedding: list[float], filter_value: str) -> list[SearchResult]:
        request = SearchRequest(
            query_embedding=query_embedding,
            min_score=self.config.min_score,
            max_results=self.config.max_results,
            filter=EqualityFilter(self.config.filter_key, filter_value),
        )
        with Timer() as timer:
            results = self.vector_store.search(request)
        logger.debug(
            "Search %s=%r returned %d results in %.1f ms",
            self.config.filter_key,
            filter_value,
            len(results),
            timer.elapsed_ms,
        )
        return results

    def is_exit(self, text: str) -> bool:
        return text.lower() in self.config.exit_keywords


def format_result(result: SearchResult) -> str:
    return f"{result.score:.4f} : {result.record.content} {dict(result.record.metadata)}"
