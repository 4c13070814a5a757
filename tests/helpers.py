"""Test doubles and drivers shared by the test modules."""
from collections.abc import AsyncIterator
from typing import Any, ClassVar

from chait.errors import ProviderNotReadyError
from chait.llm import ChatMessage, LLMProvider, StreamingResponse
from chait.session import ChunkReceived, CloseStream, Command, KeyPressed, ReceiveNext, SessionController


class FakeProvider(LLMProvider):
    """Provider that streams a scripted reply instead of calling an API."""

    name: ClassVar[str] = "fake"
    default_model: ClassVar[str] = "fake-small"
    available_models: ClassVar[tuple[str, ...]] = ("fake-small", "fake-large")

    def __init__(
        self,
        chunks: list[str] | None = None,
        error: Exception | None = None,
        **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.chunks = list(chunks or [])
        self.error = error
        self.requests: list[list[ChatMessage]] = []
        self.stream_closed = False
        self.closed = False

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        if not self.is_ready():
            raise ProviderNotReadyError(self.name)
        self.requests.append(list(messages))
        return StreamingResponse(self._generate())

    async def _generate(self) -> AsyncIterator[str]:
        try:
            for chunk in self.chunks:
                yield chunk
            if self.error is not None:
                raise self.error
        finally:
            self.stream_closed = True

    async def close(self) -> None:
        self.closed = True


class OtherFakeProvider(FakeProvider):
    name: ClassVar[str] = "other"
    default_model: ClassVar[str] = "other-model"
    available_models: ClassVar[tuple[str, ...]] = ("other-model",)


def type_text(controller: SessionController, text: str) -> list[Command]:
    """Type text one key at a time, returning the commands of the last key."""
    commands: list[Command] = []
    for char in text:
        key = "space" if char == " " else char
        commands = controller.handle(KeyPressed(key, char))
    return commands


async def drain(controller: SessionController, commands: list[Command]) -> list[Command]:
    """Run commands the way the host does until none are left."""
    executed: list[Command] = []
    queue = list(commands)
    while queue:
        command = queue.pop(0)
        executed.append(command)
        if isinstance(command, ReceiveNext):
            chunk = await command.handle.receive()
            queue.extend(controller.handle(ChunkReceived(command.handle, chunk)))
        elif isinstance(command, CloseStream):
            await command.handle.aclose()
    return executed
