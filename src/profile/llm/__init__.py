"""LLM backends, looked up by name.

Provider modules import their SDK only when a request is made, so listing or
instantiating a provider never requires the optional extras.

    provider = get_provider("openai")
    data = provider.generate_object(messages, schema, temperature=0.3)
"""

import importlib

from src.profile.llm.base import LLMProvider, parse_json_object

__all__ = ["LLMProvider", "available_providers", "get_provider", "parse_json_object"]

# name → (module, class)
_REGISTRY: dict[str, tuple[str, str]] = {
    "anthropic": ("src.profile.llm.anthropic", "AnthropicProvider"),
    "gemini": ("src.profile.llm.gemini", "GeminiProvider"),
    "ollama": ("src.profile.llm.ollama", "OllamaProvider"),
    "openai": ("src.profile.llm.openai", "OpenAIProvider"),
}


def get_provider(name: str) -> LLMProvider:
    """Instantiate the provider registered under name.

    Raises:
        ValueError: If the name is not registered.
    """
    try:
        module_path, class_name = _REGISTRY[name]
    except KeyError:
        msg = f"Unknown LLM provider '{name}'. Available: {', '.join(available_providers())}"
        raise ValueError(msg) from None

    cls = getattr(importlib.import_module(module_path), class_name)
    return cls()  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    return sorted(_REGISTRY)
