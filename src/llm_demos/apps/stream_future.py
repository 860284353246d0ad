"""Stream a chat completion and block on the deferred full response."""

from __future__ import annotations

from typing import Any

from langchain_core.messages import HumanMessage

from llm_demos.chat.streaming import (
    FutureResponseHandler,
    StreamingChatClient,
    create_chat_model,
)
from llm_demos.cli.console import ConsolePort, StdConsole
from llm_demos.config import DemoSettings
from llm_demos.obs.logger import configure_logging
from llm_demos.types import ChatResponse

PROMPT = "Give the top 5 benefits of Python"


def main(
    console: ConsolePort | None = None,
    settings: DemoSettings | None = None,
    model: Any | None = None,
) -> ChatResponse:
    settings = settings or DemoSettings.from_env()
    configure_logging(settings.log_level)

    console = console or StdConsole()
    client = StreamingChatClient(model or create_chat_model(settings))
    handler = FutureResponseHandler(console)

    client.chat([HumanMessage(content=PROMPT)], handler)
    response = handler.join()
    console.write_line()
    return response


def run() -> None:
    main()


if __name__ == "__main__":
    run()
