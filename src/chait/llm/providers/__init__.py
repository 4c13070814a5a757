from .deepseek import DeepSeekProvider
from .grok import GrokProvider
from .openai import OpenAIProvider

__all__ = ["DeepSeekProvider", "GrokProvider", "OpenAIProvider"]
