from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..errors import ValidationError
from .models import DEFAULT_TEMPERATURE_PRESETS, ChatMessage, StreamingResponse, TemperaturePreset


def mask_api_key(api_key: str) -> str:
    """Mask an API key for display, keeping the first and last four characters."""
    if not api_key:
        return ""
    if len(api_key) <= 8:
        return "****"
    return api_key[:4] + "****" + api_key[-4:]


class LLMProvider(ABC):
    """Abstract base class for chat providers.

    This module hides the design decision of which provider is talking to the
    network. The session engine only ever depends on this capability set:
    name, models, temperature presets, readiness, settings mutation and
    streaming chat.

    Shared state (API key, current model, current temperature) lives here;
    subclasses declare their catalogue through class attributes and
    implement the transport.
    """

    name: ClassVar[str]
    default_model: ClassVar[str]
    available_models: ClassVar[tuple[str, ...]]
    default_temperature: ClassVar[float] = 1.0
    max_temperature: ClassVar[float] = 2.0
    temperature_presets: ClassVar[tuple[TemperaturePreset, ...]] = DEFAULT_TEMPERATURE_PRESETS

    def __init__(
        self,
        api_key: str = "",
        model: str | None = None,
        temperature: float | None = None,
    ) -> None:
        """Initialize shared provider state.

        Invalid stored model or temperature values fall back to the
        provider defaults instead of failing, so a stale config file never
        prevents start-up.

        Args:
            api_key: API key, empty when not configured yet
            model: Model to select (None uses the provider default)
            temperature: Temperature to select (None uses the provider default)
        """
        self._api_key = api_key.strip()
        self._model = self.default_model
        self._temperature = self.default_temperature
        self._debug_callback: Any | None = None

        if model:
            try:
                self.set_model(model)
            except ValidationError:
                self._model = self.default_model
        if temperature is not None:
            try:
                self.set_temperature(temperature)
            except ValidationError:
                self._temperature = self.default_temperature

    @property
    def model(self) -> str:
        """Get the currently selected model."""
        return self._model

    @property
    def temperature(self) -> float:
        """Get the currently selected temperature."""
        return self._temperature

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def masked_api_key(self) -> str:
        return mask_api_key(self._api_key)

    def is_ready(self) -> bool:
        """A provider is ready once it has an API key."""
        return bool(self._api_key)

    def set_model(self, model: str) -> None:
        """Select a model from the provider's catalogue.

        Raises:
            ValidationError: If the model is not offered by this provider
        """
        if model not in self.available_models:
            raise ValidationError(
                f"invalid model: {model}. Available models: {', '.join(self.available_models)}"
            )
        self._model = model
        self._debug("debug", "LLM", f"{self.name} model set to {model}")

    def set_temperature(self, temperature: float) -> None:
        """Select a sampling temperature.

        Raises:
            ValidationError: If the value is outside [0, max_temperature]
        """
        if temperature < 0 or temperature > self.max_temperature:
            raise ValidationError(
                f"{self.name} temperature must be between 0.0 and {self.max_temperature:.1f}"
            )
        self._temperature = float(temperature)
        self._debug("debug", "LLM", f"{self.name} temperature set to {temperature:.1f}")

    def set_api_key(self, api_key: str) -> None:
        """Replace the API key.

        Raises:
            ValidationError: If the key is empty
        """
        api_key = api_key.strip()
        if not api_key:
            raise ValidationError("API key must not be empty")
        self._api_key = api_key
        self._on_api_key_changed()

    def _on_api_key_changed(self) -> None:
        """Hook for subclasses holding a client bound to the old key."""

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed logging.

        Args:
            callback: Callable taking (level, component, message)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        Args:
            messages: Conversation history, system message first
            model: Model to use (None uses the current model)
            temperature: Sampling temperature (None uses the current one)
            **kwargs: Provider-specific parameters

        Returns:
            StreamingResponse yielding text deltas. Transport failures are
            raised from iteration as TransportError.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
