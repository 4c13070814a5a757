"""Tests for the provider registry."""
import pytest
from helpers import FakeProvider, OtherFakeProvider

from chait.errors import ValidationError
from chait.llm import ChatMessage, DeepSeekProvider, GrokProvider, OpenAIProvider, ProviderRegistry
from chait.settings import ProviderSettings, Settings, SettingsStore


class TestFromSettings:
    """Tests for building the registry from persisted settings."""

    def test_builds_every_known_provider(self):
        registry = ProviderRegistry.from_settings(Settings(), environ={})

        assert [provider.name for provider in registry.providers()] == ["deepseek", "openai", "grok"]
        assert isinstance(registry.get("deepseek"), DeepSeekProvider)
        assert isinstance(registry.get("openai"), OpenAIProvider)
        assert isinstance(registry.get("grok"), GrokProvider)
        assert registry.active.name == "deepseek"
        assert registry.ready_providers() == []

    def test_environment_keys(self):
        registry = ProviderRegistry.from_settings(
            Settings(), environ={"OPENAI_API_KEY": "sk-env", "XAI_API_KEY": "xai-env"}
        )

        assert registry.get("openai").api_key == "sk-env"
        assert registry.get("grok").api_key == "xai-env"
        assert [p.name for p in registry.ready_providers()] == ["openai", "grok"]

    def test_stored_key_wins_over_environment(self):
        settings = Settings(providers={"openai": ProviderSettings(api_key="sk-stored")})

        registry = ProviderRegistry.from_settings(settings, environ={"OPENAI_API_KEY": "sk-env"})

        assert registry.get("openai").api_key == "sk-stored"

    def test_stored_model_and_temperature(self):
        settings = Settings(
            provider="openai",
            providers={"openai": ProviderSettings(model="gpt-4o-mini", temperature=0.3)},
        )

        registry = ProviderRegistry.from_settings(settings, environ={})

        assert registry.active.name == "openai"
        assert registry.active.model == "gpt-4o-mini"
        assert registry.active.temperature == 0.3

    def test_stale_values_fall_back_to_defaults(self):
        settings = Settings(
            provider="nonexistent",
            providers={"openai": ProviderSettings(model="gpt-1", temperature=1.8)},
        )

        registry = ProviderRegistry.from_settings(settings, environ={})

        assert registry.active.name == "deepseek"
        assert registry.get("openai").model == "gpt-4o"
        assert registry.get("openai").temperature == 1.0


class TestMutations:
    """Tests for changing and persisting provider state."""

    def test_needs_a_provider(self):
        with pytest.raises(ValueError):
            ProviderRegistry([])

    def test_set_active_provider(self, registry, settings_store):
        registry.set_active_provider("other")

        assert registry.active.name == "other"
        assert settings_store.load().provider == "other"

    def test_unknown_provider(self, registry, settings_store):
        with pytest.raises(ValidationError):
            registry.set_active_provider("missing")

        assert registry.active.name == "fake"
        assert not settings_store.path.exists()

    def test_set_model(self, registry, settings_store):
        registry.set_model("fake-large")

        assert registry.active.model == "fake-large"
        assert settings_store.load().providers["fake"].model == "fake-large"

    def test_invalid_model_is_not_saved(self, registry, settings_store):
        with pytest.raises(ValidationError, match="Available models: fake-small, fake-large"):
            registry.set_model("fake-huge")

        assert registry.active.model == "fake-small"
        assert not settings_store.path.exists()

    def test_set_temperature(self, registry, settings_store):
        registry.set_temperature(0.7)

        assert settings_store.load().providers["fake"].temperature == 0.7

    def test_temperature_out_of_range(self, registry):
        with pytest.raises(ValidationError):
            registry.set_temperature(2.5)
        with pytest.raises(ValidationError):
            registry.set_temperature(-0.1)

        assert registry.active.temperature == 1.0

    def test_set_api_key(self, settings_store):
        provider = OtherFakeProvider()
        registry = ProviderRegistry([provider], store=settings_store)

        registry.set_api_key("  sk-new  ")

        assert provider.is_ready()
        assert provider.api_key == "sk-new"
        assert settings_store.load().providers["other"].api_key == "sk-new"

    def test_empty_api_key(self, registry):
        with pytest.raises(ValidationError):
            registry.set_api_key("   ")

    def test_no_store_keeps_changes_in_memory(self):
        registry = ProviderRegistry([FakeProvider(), OtherFakeProvider()])

        registry.set_active_provider("other")

        assert registry.active.name == "other"
        assert registry.settings.provider == "other"


class TestStreaming:
    @pytest.mark.asyncio
    async def test_stream_chat(self, registry, fake_provider):
        messages = [ChatMessage(role="user", content="hi")]

        chunks = [chunk async for chunk in registry.stream_chat(messages)]

        assert chunks == ["Hel", "lo, ", "world"]
        assert fake_provider.requests == [messages]
        assert fake_provider.stream_closed

    @pytest.mark.asyncio
    async def test_stream_belongs_to_provider_active_at_start(self, registry, fake_provider):
        stream = registry.stream_chat([ChatMessage(role="user", content="hi")])
        first = await anext(stream)

        registry.set_active_provider("other")
        rest = [chunk async for chunk in stream]

        assert first + "".join(rest) == "Hello, world"

    @pytest.mark.asyncio
    async def test_closing_stream_closes_provider_stream(self, registry, fake_provider):
        stream = registry.stream_chat([ChatMessage(role="user", content="hi")])
        await anext(stream)

        await stream.aclose()

        assert fake_provider.stream_closed

    @pytest.mark.asyncio
    async def test_close(self, registry):
        await registry.close()

        assert all(provider.closed for provider in registry.providers())


class TestDebugCallback:
    def test_propagates_to_providers(self, registry, fake_provider):
        records = []
        registry.set_debug_callback(lambda level, component, message: records.append((level, component, message)))

        registry.set_model("fake-large")

        assert ("debug", "LLM", "fake model set to fake-large") in records
        assert any(component == "Settings" for _, component, _ in records)

    def test_store_path_logged(self, tmp_path):
        records = []
        store = SettingsStore(tmp_path / "logged.json")
        registry = ProviderRegistry([FakeProvider()], store=store)
        registry.set_debug_callback(lambda level, component, message: records.append(message))

        registry.set_temperature(0.0)

        assert f"Saved {store.path}" in records
