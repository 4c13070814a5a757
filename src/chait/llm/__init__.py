from .base import LLMProvider, mask_api_key
from .factory import API_KEY_ENV_VARS, PROVIDER_CLASSES, create_llm_provider
from .models import DEFAULT_TEMPERATURE_PRESETS, ChatMessage, StreamingResponse, TemperaturePreset
from .providers import DeepSeekProvider, GrokProvider, OpenAIProvider
from .registry import ProviderRegistry

__all__ = [
    "API_KEY_ENV_VARS",
    "DEFAULT_TEMPERATURE_PRESETS",
    "PROVIDER_CLASSES",
    "ChatMessage",
    "DeepSeekProvider",
    "GrokProvider",
    "LLMProvider",
    "OpenAIProvider",
    "ProviderRegistry",
    "StreamingResponse",
    "TemperaturePreset",
    "create_llm_provider",
    "mask_api_key",
]
