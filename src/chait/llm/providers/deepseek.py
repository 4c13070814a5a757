from typing import ClassVar

from ..models import TemperaturePreset
from .openai import OpenAIProvider


class DeepSeekProvider(OpenAIProvider):
    """DeepSeek provider using the OpenAI-compatible API.

    Hidden design decisions:
    - DeepSeek endpoint and model catalogue
    - DeepSeek's recommended temperatures, which run higher than OpenAI's
    """

    name: ClassVar[str] = "deepseek"
    default_model: ClassVar[str] = "deepseek-chat"
    available_models: ClassVar[tuple[str, ...]] = ("deepseek-chat", "deepseek-reasoner")
    default_temperature: ClassVar[float] = 1.0
    max_temperature: ClassVar[float] = 2.0
    temperature_presets: ClassVar[tuple[TemperaturePreset, ...]] = (
        TemperaturePreset(name="Code Generation", value=0.0, description="Code generation or math problem solving"),
        TemperaturePreset(name="Data Extraction", value=1.0, description="Data extraction and analysis"),
        TemperaturePreset(name="General Conversation", value=1.3, description="General conversation"),
        TemperaturePreset(name="Translation", value=1.3, description="Translation tasks"),
        TemperaturePreset(name="Creative Writing", value=1.5, description="Creative writing or poetry"),
    )
    default_base_url: ClassVar[str | None] = "https://api.deepseek.com"
