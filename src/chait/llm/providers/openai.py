from collections.abc import AsyncIterator
from typing import Any, ClassVar

from openai import AsyncOpenAI, OpenAIError

from ...errors import ProviderNotReadyError, StreamParseError, TransportError
from ..base import LLMProvider
from ..models import ChatMessage, StreamingResponse, TemperaturePreset

# Reasoning models that reject an explicit temperature
FIXED_TEMPERATURE_MODELS = frozenset({"o1", "o3-mini"})


def _delta_content(chunk: Any) -> str | None:
    """Extract the text delta of a streamed chunk, or None if it carries none.

    Raises:
        StreamParseError: If the delta content is not text
    """
    choices = getattr(chunk, "choices", None)
    if not choices:
        return None
    delta = getattr(choices[0], "delta", None)
    if delta is None:
        return None
    content = getattr(delta, "content", None)
    if content is not None and not isinstance(content, str):
        raise StreamParseError(f"unexpected delta content: {type(content).__name__}")
    return content


class OpenAIProvider(LLMProvider):
    """OpenAI provider implementation.

    Hidden design decisions:
    - OpenAI API client initialization (created lazily, once a key exists)
    - Message format conversion
    - Mapping SDK errors onto TransportError
    - Which models ignore temperature

    DeepSeek and Grok expose the same wire protocol and subclass this,
    overriding only the endpoint and catalogue.
    """

    name: ClassVar[str] = "openai"
    default_model: ClassVar[str] = "gpt-4o"
    available_models: ClassVar[tuple[str, ...]] = (
        "o1",
        "o3-mini",
        "gpt-4.5",
        "gpt-4o",
        "gpt-4o-mini",
    )
    default_temperature: ClassVar[float] = 1.0
    max_temperature: ClassVar[float] = 1.0
    temperature_presets: ClassVar[tuple[TemperaturePreset, ...]] = (
        TemperaturePreset(name="Code Generation", value=0.0, description="Code generation or math problem solving"),
        TemperaturePreset(name="Data Extraction", value=0.3, description="Data extraction and analysis"),
        TemperaturePreset(name="Translation", value=0.5, description="Translation tasks"),
        TemperaturePreset(name="General Conversation", value=0.7, description="General conversation"),
        TemperaturePreset(name="Creative Writing", value=1.0, description="Creative writing or poetry"),
    )
    default_base_url: ClassVar[str | None] = None

    def __init__(
        self,
        api_key: str = "",
        model: str | None = None,
        temperature: float | None = None,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: API key (may be empty; the provider is then not ready)
            model: Model to select
            temperature: Temperature to select
            base_url: Optional custom API base URL
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(api_key=api_key, model=model, temperature=temperature)
        self._base_url = base_url or self.default_base_url
        self._client_kwargs = client_kwargs
        self._client: AsyncOpenAI | None = None
        self._retired_clients: list[AsyncOpenAI] = []

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                **self._client_kwargs
            )
        return self._client

    def _on_api_key_changed(self) -> None:
        if self._client is not None:
            self._retired_clients.append(self._client)
            self._client = None

    def _build_request(
        self,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "stream": True,
            "stream_options": {"include_usage": True},
        }
        if model in FIXED_TEMPERATURE_MODELS:
            self._debug("debug", "LLM", f"Temperature ignored for model {model}")
        else:
            request["temperature"] = temperature
        return request

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        Raises:
            ProviderNotReadyError: If no API key is configured
        """
        if not self.is_ready():
            raise ProviderNotReadyError(self.name)

        model_to_use = model or self._model
        temperature_to_use = self._temperature if temperature is None else temperature
        api_messages = [{"role": msg.role, "content": msg.content} for msg in messages]

        self._debug(
            "info",
            "LLM",
            f"Streaming request to {self.name} ({model_to_use}) with {len(api_messages)} messages",
        )
        return StreamingResponse(self._stream_generator(
            self._build_request(model_to_use, api_messages, temperature_to_use), **kwargs
        ))

    async def _stream_generator(self, request: dict[str, Any], **kwargs: Any) -> AsyncIterator[str]:
        """Internal generator that yields chunks and logs the reported usage."""
        try:
            stream = await self._get_client().chat.completions.create(**request, **kwargs)
        except OpenAIError as e:
            raise TransportError(f"{self.name} request failed: {e}") from e

        try:
            async for chunk in stream:
                usage = getattr(chunk, "usage", None)
                if usage is not None:
                    self._debug(
                        "info",
                        "LLM",
                        f"{self.name} usage: {usage.prompt_tokens} prompt + "
                        f"{usage.completion_tokens} completion = {usage.total_tokens} tokens",
                    )
                try:
                    content = _delta_content(chunk)
                except StreamParseError as e:
                    self._debug("warning", "LLM", f"Skipping malformed chunk: {e}")
                    continue
                if content:
                    yield content
        except OpenAIError as e:
            raise TransportError(f"{self.name} stream failed: {e}") from e
        finally:
            await stream.close()

    async def close(self) -> None:
        """Close the client and any client replaced by a key change."""
        clients = self._retired_clients
        if self._client is not None:
            clients = [*clients, self._client]
        self._retired_clients = []
        self._client = None
        for client in clients:
            await client.close()
