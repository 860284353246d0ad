"""Streaming chat over LangChain chat models with callback-style handlers.

A request produces an ordered sequence of partial-text callbacks followed by
exactly one terminal callback: `on_complete_response` or `on_error`. Callbacks
run on the client's worker thread, never on the caller's.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, InvalidStateError
from typing import Any, Protocol

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from llm_demos.cli.console import ConsolePort
from llm_demos.config import ChatConfig, DemoSettings
from llm_demos.types import ChatResponse

logger = logging.getLogger(__name__)


class StreamingResponseHandler(Protocol):
    def on_partial_response(self, partial: str) -> None:
        """Receive one token chunk, in generation order."""

    def on_complete_response(self, response: ChatResponse) -> None:
        """Receive the full response once streaming finishes."""

    def on_error(self, error: BaseException) -> None:
        """Receive the failure that ended the stream."""


class StreamingChatClient:
    """Runs `model.stream(messages)` on a worker thread and fans out callbacks.

    `model` is any LangChain chat model, or anything exposing a compatible
    `stream(messages)` that yields message chunks.
    """

    def __init__(self, model: Any, *, thread_name: str = "chat-stream") -> None:
        self.model = model
        self.thread_name = thread_name

    def chat(
        self,
        messages: Sequence[BaseMessage] | str,
        handler: StreamingResponseHandler,
    ) -> threading.Thread:
        """Start streaming and return the worker thread immediately."""

        payload = messages if isinstance(messages, str) else list(messages)
        worker = threading.Thread(
            target=self._run,
            args=(payload, handler),
            name=self.thread_name,
        )
        worker.start()
        return worker

    def _run(self, messages: Any, handler: StreamingResponseHandler) -> None:
        parts: list[str] = []
        aggregate: Any = None
        try:
            for chunk in self.model.stream(messages):
                aggregate = chunk if aggregate is None else aggregate + chunk
                text = _chunk_text(chunk)
                if not text:
                    continue
                parts.append(text)
                handler.on_partial_response(text)
        except Exception as exc:
            logger.debug("Chat stream failed after %d chunks", len(parts), exc_info=True)
            handler.on_error(exc)
            return

        response = ChatResponse(text="".join(parts), metadata=_response_metadata(aggregate))
        logger.debug("Chat stream completed: %d chunks, %d chars", len(parts), len(response.text))
        try:
            handler.on_complete_response(response)
        except Exception as exc:
            logger.debug("Completion handler failed", exc_info=True)
            handler.on_error(exc)


class PrintingResponseHandler:
    """Prints tokens as they arrive and a marker when the stream completes."""

    def __init__(self, console: ConsolePort, *, completion_marker: str = "Complete!") -> None:
        self.console = console
        self.completion_marker = completion_marker

    def on_partial_response(self, partial: str) -> None:
        self.console.write(partial)

    def on_complete_response(self, response: ChatResponse) -> None:
        self.console.write_line()
        self.console.write_line(self.completion_marker)

    def on_error(self, error: BaseException) -> None:
        logger.error("Chat stream failed", exc_info=error)
        self.console.write_line()
        self.console.write_line(f"Error: {error}")


class FutureResponseHandler:
    """Prints tokens and resolves a single-assignment future on the terminal event."""

    def __init__(self, console: ConsolePort) -> None:
        self.console = console
        self.future: Future[ChatResponse] = Future()

    def on_partial_response(self, partial: str) -> None:
        self.console.write(partial)

    def on_complete_response(self, response: ChatResponse) -> None:
        self._resolve(lambda: self.future.set_result(response))

    def on_error(self, error: BaseException) -> None:
        self._resolve(lambda: self.future.set_exception(error))

    def join(self, timeout: float | None = None) -> ChatResponse:
        """Block until the stream ends; re-raise the stream's error if it failed."""

        return self.future.result(timeout=timeout)

    def _resolve(self, assign: Callable[[], None]) -> None:
        try:
            assign()
        except InvalidStateError:
            logger.warning("Ignoring second terminal event for an already resolved response")


def create_chat_model(settings: DemoSettings, config: ChatConfig | None = None) -> ChatOpenAI:
    config = config or settings.chat_config()
    return ChatOpenAI(
        model=config.model,
        api_key=settings.openai_api_key,
        timeout=config.timeout_seconds,
        streaming=True,
    )


def _chunk_text(chunk: Any) -> str:
    if isinstance(chunk, str):
        return chunk
    content = getattr(chunk, "content", "")
    if isinstance(content, list):
        return "".join(
            str(item.get("text", "")) if isinstance(item, dict) else str(item)
            for item in content
        )
    return str(content or "")


def _response_metadata(aggregate: Any) -> dict[str, Any]:
    metadata = getattr(aggregate, "response_metadata", None)
    return dict(metadata) if isinstance(metadata, dict) else {}
