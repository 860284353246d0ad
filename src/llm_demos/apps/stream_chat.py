"""Stream a chat completion and observe completion through a callback."""

from __future__ import annotations

import threading
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage

from llm_demos.chat.streaming import (
    PrintingResponseHandler,
    StreamingChatClient,
    create_chat_model,
)
from llm_demos.cli.console import ConsolePort, StdConsole
from llm_demos.config import DemoSettings
from llm_demos.obs.logger import configure_logging

MESSAGES = [
    SystemMessage(content="You are a senior Python software engineer"),
    HumanMessage(content="Explain why Python is useful for creating GenAI applications."),
]


def main(
    console: ConsolePort | None = None,
    settings: DemoSettings | None = None,
    model: Any | None = None,
) -> threading.Thread:
    """Start the stream and return without waiting for it to finish."""

    settings = settings or DemoSettings.from_env()
    configure_logging(settings.log_level)

    config = settings.chat_config()
    client = StreamingChatClient(model or create_chat_model(settings, config))
    handler = PrintingResponseHandler(
        console or StdConsole(), completion_marker=config.completion_marker
    )
    return client.chat(MESSAGES, handler)


def run() -> None:
    """Console-script entry point; the non-daemon worker keeps the process alive."""

    main()


if __name__ == "__main__":
    run()
