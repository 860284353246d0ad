import threading

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from llm_demos.chat.streaming import (
    FutureResponseHandler,
    PrintingResponseHandler,
    StreamingChatClient,
)
from llm_demos.types import ChatResponse


class _RecordingHandler:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []
        self.threads: set[str] = set()
        self.done = threading.Event()

    def on_partial_response(self, partial: str) -> None:
        self.threads.add(threading.current_thread().name)
        self.events.append(("partial", partial))

    def on_complete_response(self, response: ChatResponse) -> None:
        self.events.append(("complete", response))
        self.done.set()

    def on_error(self, error: BaseException) -> None:
        self.events.append(("error", error))
        self.done.set()


def test_partials_arrive_in_order_then_single_completion(fake_chat_model) -> None:
    model = fake_chat_model(["Hel", "lo"])
    handler = _RecordingHandler()

    StreamingChatClient(model).chat([HumanMessage(content="hi")], handler).join(timeout=5)

    assert [kind for kind, _ in handler.events] == ["partial", "partial", "complete"]
    assert [value for kind, value in handler.events if kind == "partial"] == ["Hel", "lo"]
    response = handler.events[-1][1]
    assert isinstance(response, ChatResponse)
    assert response.text == "Hello"
    assert response.metadata.get("finish_reason") == "stop"


def test_callbacks_run_on_worker_thread(fake_chat_model) -> None:
    handler = _RecordingHandler()

    worker = StreamingChatClient(fake_chat_model(["a", "b"]), thread_name="stream-test").chat(
        [HumanMessage(content="hi")], handler
    )
    worker.join(timeout=5)

    assert handler.threads == {"stream-test"}


def test_failure_after_partials_emits_single_error(fake_chat_model) -> None:
    model = fake_chat_model(["partial "], error=ConnectionError("stream dropped"))
    handler = _RecordingHandler()

    StreamingChatClient(model).chat([HumanMessage(content="hi")], handler).join(timeout=5)

    kinds = [kind for kind, _ in handler.events]
    assert kinds == ["partial", "error"]
    assert isinstance(handler.events[-1][1], ConnectionError)


def test_empty_chunks_are_not_forwarded(fake_chat_model) -> None:
    handler = _RecordingHandler()

    StreamingChatClient(fake_chat_model(["", "Hi", ""])).chat(
        [HumanMessage(content="hi")], handler
    ).join(timeout=5)

    assert handler.events[0] == ("partial", "Hi")
    assert handler.events[-1][1].text == "Hi"


def test_messages_are_passed_through_in_order(fake_chat_model) -> None:
    model = fake_chat_model(["ok"])
    messages = [SystemMessage(content="system"), HumanMessage(content="user")]

    StreamingChatClient(model).chat(messages, _RecordingHandler()).join(timeout=5)

    assert model.received == [messages]


def test_printing_handler_output(fake_chat_model, scripted_console) -> None:
    console = scripted_console()

    StreamingChatClient(fake_chat_model(["Hel", "lo"])).chat(
        [HumanMessage(content="hi")], PrintingResponseHandler(console)
    ).join(timeout=5)

    assert console.output == "Hello\nComplete!\n"


def test_future_handler_join_returns_full_text(fake_chat_model, scripted_console) -> None:
    console = scripted_console()
    handler = FutureResponseHandler(console)

    StreamingChatClient(fake_chat_model(["Hel", "lo"])).chat(
        [HumanMessage(content="hi")], handler
    )

    assert handler.join(timeout=5).text == "Hello"
    assert console.output == "Hello"


def test_future_handler_join_raises_stream_error(fake_chat_model, scripted_console) -> None:
    handler = FutureResponseHandler(scripted_console())

    StreamingChatClient(fake_chat_model([], error=RuntimeError("quota exceeded"))).chat(
        [HumanMessage(content="hi")], handler
    )

    with pytest.raises(RuntimeError, match="quota exceeded"):
        handler.join(timeout=5)


class _FailingCompletionHandler(_RecordingHandler):
    def on_complete_response(self, response: ChatResponse) -> None:
        raise OSError("console closed")


def test_failing_completion_callback_is_routed_to_on_error(fake_chat_model) -> None:
    handler = _FailingCompletionHandler()

    StreamingChatClient(fake_chat_model(["Hel", "lo"])).chat(
        [HumanMessage(content="hi")], handler
    ).join(timeout=5)

    kinds = [kind for kind, _ in handler.events]
    assert kinds == ["partial", "partial", "error"]
    assert isinstance(handler.events[-1][1], OSError)
