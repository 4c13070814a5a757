"""Tests for the OpenAI-compatible providers."""
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from chait.errors import ProviderNotReadyError, StreamParseError, TransportError, ValidationError
from chait.llm import (
    DEFAULT_TEMPERATURE_PRESETS,
    ChatMessage,
    DeepSeekProvider,
    GrokProvider,
    OpenAIProvider,
    create_llm_provider,
    mask_api_key,
)
from chait.llm.providers.openai import _delta_content


def _chunk(content=None, usage=None):
    return SimpleNamespace(
        choices=[SimpleNamespace(delta=SimpleNamespace(content=content))] if content is not None else [],
        usage=usage,
    )


class _FakeStream:
    """Stands in for the SDK's AsyncStream."""

    def __init__(self, chunks):
        self._chunks = list(chunks)
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._chunks:
            raise StopAsyncIteration
        return self._chunks.pop(0)

    async def close(self):
        self.closed = True


def _fake_client(stream=None, error=None):
    requests = []

    async def create(**kwargs):
        requests.append(kwargs)
        if error is not None:
            raise error
        return stream

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return client, requests


class TestFactory:
    """Tests for create_llm_provider."""

    def test_known_providers(self):
        assert isinstance(create_llm_provider("deepseek"), DeepSeekProvider)
        assert isinstance(create_llm_provider("OpenAI"), OpenAIProvider)
        assert isinstance(create_llm_provider("grok"), GrokProvider)

    def test_xai_alias(self):
        assert isinstance(create_llm_provider("xai", api_key="k"), GrokProvider)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("llama")

    def test_passes_config(self):
        provider = create_llm_provider("openai", api_key="sk", model="gpt-4o-mini", temperature=0.3)

        assert provider.is_ready()
        assert provider.model == "gpt-4o-mini"
        assert provider.temperature == 0.3


class TestCatalogues:
    def test_endpoints(self):
        assert DeepSeekProvider()._base_url == "https://api.deepseek.com"
        assert GrokProvider()._base_url == "https://api.x.ai/v1"
        assert OpenAIProvider()._base_url is None
        assert OpenAIProvider(base_url="http://localhost:8080/v1")._base_url == "http://localhost:8080/v1"

    def test_defaults(self):
        assert DeepSeekProvider().model == "deepseek-chat"
        assert OpenAIProvider().model == "gpt-4o"
        assert GrokProvider().model == "grok-2-1212"

    def test_openai_temperature_capped_at_one(self):
        provider = OpenAIProvider()

        with pytest.raises(ValidationError, match="between 0.0 and 1.0"):
            provider.set_temperature(1.5)
        DeepSeekProvider().set_temperature(1.5)

    def test_presets_within_provider_range(self):
        for provider in (DeepSeekProvider(), OpenAIProvider(), GrokProvider()):
            for preset in provider.temperature_presets:
                provider.set_temperature(preset.value)

    def test_preset_label(self):
        assert DEFAULT_TEMPERATURE_PRESETS[0].label == (
            "Precise (0.0) - Highly deterministic responses for factual queries"
        )


class TestProviderState:
    """Tests for the state shared by every provider."""

    def test_ready_once_key_set(self):
        provider = OpenAIProvider()
        assert not provider.is_ready()

        provider.set_api_key("sk-test")
        assert provider.is_ready()

    def test_whitespace_key_is_not_ready(self):
        assert not OpenAIProvider(api_key="   ").is_ready()

    def test_invalid_stored_values_fall_back(self):
        provider = OpenAIProvider(model="gpt-2", temperature=3.0)

        assert provider.model == "gpt-4o"
        assert provider.temperature == 1.0

    def test_mask_api_key(self):
        assert mask_api_key("") == ""
        assert mask_api_key("short") == "****"
        assert mask_api_key("sk-1234567890") == "sk-1****7890"


class TestRequests:
    def test_fixed_temperature_models_omit_temperature(self):
        provider = OpenAIProvider(api_key="k")

        assert "temperature" not in provider._build_request("o1", [], 0.5)
        assert "temperature" not in provider._build_request("o3-mini", [], 0.5)
        assert provider._build_request("gpt-4o", [], 0.5)["temperature"] == 0.5

    @pytest.mark.asyncio
    async def test_not_ready(self):
        with pytest.raises(ProviderNotReadyError):
            await OpenAIProvider().chat_completion_stream([ChatMessage(role="user", content="hi")])


class TestDeltaContent:
    def test_text(self):
        assert _delta_content(_chunk("abc")) == "abc"

    def test_no_choices(self):
        assert _delta_content(_chunk()) is None

    def test_no_delta(self):
        assert _delta_content(SimpleNamespace(choices=[SimpleNamespace(delta=None)])) is None

    def test_non_text(self):
        with pytest.raises(StreamParseError):
            _delta_content(_chunk(5))


class TestStreaming:
    """Tests for the streaming generator against a stand-in client."""

    @pytest.mark.asyncio
    async def test_yields_text_and_logs_usage(self, monkeypatch):
        stream = _FakeStream([
            _chunk("Hel"),
            _chunk(5),
            _chunk(""),
            _chunk("lo"),
            _chunk(usage=SimpleNamespace(prompt_tokens=1, completion_tokens=2, total_tokens=3)),
        ])
        client, requests = _fake_client(stream)
        provider = DeepSeekProvider(api_key="k", temperature=1.3)
        monkeypatch.setattr(provider, "_get_client", lambda: client)
        logged = []
        provider.set_debug_callback(lambda *entry: logged.append(entry))

        response = await provider.chat_completion_stream([ChatMessage(role="user", content="hi")])
        chunks = [chunk async for chunk in response]

        assert chunks == ["Hel", "lo"]
        assert ("info", "LLM", "deepseek usage: 1 prompt + 2 completion = 3 tokens") in logged
        assert ("warning", "LLM", "Skipping malformed chunk: unexpected delta content: int") in logged
        assert stream.closed
        assert requests[0]["model"] == "deepseek-chat"
        assert requests[0]["temperature"] == 1.3
        assert requests[0]["messages"] == [{"role": "user", "content": "hi"}]

    @pytest.mark.asyncio
    async def test_request_failure_is_transport_error(self, monkeypatch):
        client, _ = _fake_client(error=OpenAIError("connection refused"))
        provider = OpenAIProvider(api_key="k")
        monkeypatch.setattr(provider, "_get_client", lambda: client)

        response = await provider.chat_completion_stream([ChatMessage(role="user", content="hi")])

        with pytest.raises(TransportError, match="connection refused"):
            await anext(response)


class TestClients:
    @pytest.mark.asyncio
    async def test_key_change_replaces_client(self):
        provider = OpenAIProvider(api_key="sk-old")
        old = provider._get_client()

        provider.set_api_key("sk-new")
        new = provider._get_client()

        assert new is not old
        assert new.api_key == "sk-new"
        await provider.close()
        assert provider._client is None
