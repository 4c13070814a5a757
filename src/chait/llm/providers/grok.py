from typing import ClassVar

from ..models import TemperaturePreset
from .openai import OpenAIProvider


class GrokProvider(OpenAIProvider):
    """xAI Grok provider using the OpenAI-compatible API."""

    name: ClassVar[str] = "grok"
    default_model: ClassVar[str] = "grok-2-1212"
    available_models: ClassVar[tuple[str, ...]] = ("grok-2-1212",)
    default_temperature: ClassVar[float] = 1.0
    max_temperature: ClassVar[float] = 2.0
    temperature_presets: ClassVar[tuple[TemperaturePreset, ...]] = (
        TemperaturePreset(
            name="Focused", value=0.2, description="More focused and deterministic responses for specific tasks"
        ),
        TemperaturePreset(name="Balanced Low", value=0.5, description="Good balance with slight focus on determinism"),
        TemperaturePreset(name="Balanced", value=1.0, description="Default balance between randomness and determinism"),
        TemperaturePreset(name="Creative", value=1.5, description="More random and creative responses"),
        TemperaturePreset(name="Highly Creative", value=2.0, description="Maximum randomness for highly varied outputs"),
    )
    default_base_url: ClassVar[str | None] = "https://api.x.ai/v1"
