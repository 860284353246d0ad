"""Line-oriented loading of text files into metadata-tagged records."""

from __future__ import annotations

import logging
from pathlib import Path

from llm_demos.config import MetadataConfig
from llm_demos.types import TextRecord

logger = logging.getLogger(__name__)


class LineLoader:
    """Turns every non-blank line of a UTF-8 text file into a `TextRecord`."""

    encoding = "utf-8"

    def load(self, path: str | Path, metadata: MetadataConfig) -> list[TextRecord]:
        """Load one record per non-blank line.

        A file that cannot be read is logged and yields an empty list, so one
        bad input does not abort the rest of an ingest run.
        """

        file_path = Path(path)
        try:
            text = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read %s; skipping", file_path)
            return []

        stamp = metadata.as_metadata()
        records = [
            TextRecord(content=line, metadata=stamp)
            for line in text.splitlines()
            if line.strip()
        ]
        logger.info(
            "Loaded %d records from %s (author=%s, category=%s)",
            len(records),
            file_path.name,
            metadata.author,
            metadata.category,
        )
        return records
