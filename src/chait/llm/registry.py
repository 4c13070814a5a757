"""Provider registry.

Hides which providers exist, which one is active, and how changes to them
are persisted. One registry is built at start-up and handed to the session
controller; there is no process-wide provider state.
"""

import os
from collections.abc import AsyncIterator, Iterable, Mapping
from typing import Any

from ..errors import ValidationError
from ..settings import Settings, SettingsStore
from .base import LLMProvider
from .factory import API_KEY_ENV_VARS, PROVIDER_CLASSES, create_llm_provider
from .models import ChatMessage


class ProviderRegistry:
    """The set of available providers plus the active selection.

    Every mutating operation either succeeds and is written through the
    settings store, or raises (ValidationError for rejected values,
    SettingsError when the config file cannot be written).
    """

    def __init__(
        self,
        providers: Iterable[LLMProvider],
        active: str | None = None,
        store: SettingsStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._providers: dict[str, LLMProvider] = {p.name: p for p in providers}
        if not self._providers:
            raise ValueError("ProviderRegistry needs at least one provider")

        if active not in self._providers:
            active = next(iter(self._providers))
        self._active = active
        self._store = store
        self._settings = settings if settings is not None else Settings(provider=active)
        self._debug_callback: Any | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: SettingsStore | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "ProviderRegistry":
        """Build every known provider from persisted settings.

        Keys stored in the config file win; otherwise the provider's
        environment variable is used.
        """
        env = os.environ if environ is None else environ
        providers = []
        for name in PROVIDER_CLASSES:
            stored = settings.providers.get(name)
            api_key = stored.api_key if stored and stored.api_key else env.get(API_KEY_ENV_VARS[name], "")
            providers.append(create_llm_provider(
                name,
                api_key=api_key,
                model=stored.model if stored else None,
                temperature=stored.temperature if stored else None,
            ))
        return cls(providers, active=settings.provider, store=store, settings=settings)

    @property
    def active(self) -> LLMProvider:
        """The provider new conversations are sent to."""
        return self._providers[self._active]

    @property
    def settings(self) -> Settings:
        return self._settings

    def providers(self) -> list[LLMProvider]:
        return list(self._providers.values())

    def ready_providers(self) -> list[LLMProvider]:
        ready = [p for p in self._providers.values() if p.is_ready()]
        self._debug("debug", "Registry", f"Found {len(ready)} ready providers")
        return ready

    def get(self, name: str) -> LLMProvider:
        """Look up a provider by name.

        Raises:
            ValidationError: If no provider has that name
        """
        try:
            return self._providers[name]
        except KeyError:
            raise ValidationError(f"provider {name} not found") from None

    def set_active_provider(self, name: str) -> None:
        self.get(name)
        self._active = name
        self._settings.provider = name
        self._persist()
        self._debug("info", "Registry", f"Active provider set to {name}")

    def set_model(self, model: str) -> None:
        provider = self.active
        provider.set_model(model)
        self._settings.for_provider(provider.name).model = provider.model
        self._persist()

    def set_temperature(self, temperature: float) -> None:
        provider = self.active
        provider.set_temperature(temperature)
        self._settings.for_provider(provider.name).temperature = provider.temperature
        self._persist()

    def set_api_key(self, api_key: str) -> None:
        provider = self.active
        provider.set_api_key(api_key)
        self._settings.for_provider(provider.name).api_key = provider.api_key
        self._persist()
        self._debug("info", "Registry", f"API key for {provider.name} set ({provider.masked_api_key})")

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save(self._settings)
            self._debug("debug", "Settings", f"Saved {self._store.path}")

    async def stream_chat(self, messages: list[ChatMessage]) -> AsyncIterator[str]:
        """Stream a reply from the active provider.

        The provider is resolved when iteration starts, so a stream always
        belongs to the provider that was active when it was opened. Closing
        this generator closes the provider's stream as well.
        """
        provider = self.active
        stream = await provider.chat_completion_stream(messages)
        try:
            async for chunk in stream:
                yield chunk
        finally:
            await stream.aclose()

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback and propagate it to every provider."""
        self._debug_callback = callback
        for provider in self._providers.values():
            provider.set_debug_callback(callback)

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def close(self) -> None:
        for provider in self._providers.values():
            await provider.close()
