"""Console logging setup shared by the demo entry points."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a single stderr handler on the root logger.

    Logs go to stderr so they never interleave with the tokens and search
    results the demos print to stdout.
    """

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
