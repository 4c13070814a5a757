from collections.abc import AsyncIterator
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One message of the history sent to a provider."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"] = Field(description="Who wrote the message")
    content: str = Field(description="Message text")


class StreamingResponse:
    """Text deltas of one completion.

    ``aclose()`` releases the HTTP response before the last delta.

    Usage:
        response = await provider.chat_completion_stream(messages)
        async for delta in response:
            ...
    """

    def __init__(self, deltas: AsyncIterator[str]) -> None:
        self._deltas = deltas

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        return await anext(self._deltas)

    async def aclose(self) -> None:
        aclose = getattr(self._deltas, "aclose", None)
        if aclose is not None:
            await aclose()


class TemperaturePreset(BaseModel):
    """A named temperature setting suited to a kind of task."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float = Field(ge=0.0, le=2.0)
    description: str = ""

    @property
    def label(self) -> str:
        return f"{self.name} ({self.value:.1f}) - {self.description}"


DEFAULT_TEMPERATURE_PRESETS: tuple[TemperaturePreset, ...] = (
    TemperaturePreset(name="Precise", value=0.0, description="Highly deterministic responses for factual queries"),
    TemperaturePreset(name="Balanced", value=0.7, description="Good balance between creativity and coherence"),
    TemperaturePreset(name="Creative", value=1.0, description="More varied and creative responses"),
    TemperaturePreset(
        name="Very Creative", value=1.5, description="Highly varied and potentially more unexpected responses"
    ),
)
