from typing import Any

from .base import LLMProvider
from .providers import DeepSeekProvider, GrokProvider, OpenAIProvider

PROVIDER_CLASSES: dict[str, type[LLMProvider]] = {
    DeepSeekProvider.name: DeepSeekProvider,
    OpenAIProvider.name: OpenAIProvider,
    GrokProvider.name: GrokProvider,
}

# Environment variables consulted when the config file holds no key
API_KEY_ENV_VARS: dict[str, str] = {
    "deepseek": "DEEPSEEK_API_KEY",
    "openai": "OPENAI_API_KEY",
    "grok": "XAI_API_KEY",
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different providers.
    Unlike a one-shot client, a provider may be created without an API key:
    it then reports ``is_ready() == False`` until one is set.

    Args:
        provider: Provider type ('deepseek', 'openai', 'grok'; 'xai' is an alias)
        **config: Provider configuration
            - api_key: str (default: '')
            - model: str | None (default: provider default)
            - temperature: float | None (default: provider default)
            - base_url: str | None (default: provider endpoint)

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider("deepseek", api_key="sk-...")
        >>> provider = create_llm_provider("openai", model="gpt-4o-mini")
    """
    provider_lower = provider.lower()
    if provider_lower == "xai":
        provider_lower = "grok"

    provider_class = PROVIDER_CLASSES.get(provider_lower)
    if provider_class is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(repr(name) for name in PROVIDER_CLASSES)}"
        )
    return provider_class(**config)
