from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

import pytest
from langchain_core.messages import AIMessageChunk


class ScriptedConsole:
    """Console port that replays scripted input and records output."""

    def __init__(self, inputs: Iterable[str]) -> None:
        self._inputs = list(inputs)
        self.prompts: list[str] = []
        self.output = ""

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._inputs:
            raise EOFError
        return self._inputs.pop(0)

    def write(self, text: str) -> None:
        self.output += text

    def write_line(self, text: str = "") -> None:
        self.output += text + "\n"

    @property
    def lines(self) -> list[str]:
        return self.output.splitlines()


class FakeStreamingChatModel:
    """Chat model double that streams fixed chunks, optionally failing at the end."""

    def __init__(
        self,
        chunks: Iterable[str],
        *,
        error: Exception | None = None,
        finish_reason: str = "stop",
    ) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.finish_reason = finish_reason
        self.received: list[Any] = []

    def stream(self, messages: Any) -> Iterator[AIMessageChunk]:
        self.received.append(messages)
        for index, text in enumerate(self.chunks):
            metadata = (
                {"finish_reason": self.finish_reason}
                if index == len(self.chunks) - 1
                else {}
            )
            yield AIMessageChunk(content=text, response_metadata=metadata)
        if self.error is not None:
            raise self.error


@pytest.fixture
def scripted_console() -> Callable[..., ScriptedConsole]:
    def _factory(*inputs: str) -> ScriptedConsole:
        return ScriptedConsole(inputs)

    return _factory


@pytest.fixture
def fake_chat_model() -> Callable[..., FakeStreamingChatModel]:
    return FakeStreamingChatModel
