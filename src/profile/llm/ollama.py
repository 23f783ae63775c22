"""Local Ollama backend through its OpenAI-compatible endpoint."""

from src.profile.llm.openai import OpenAIProvider


class OllamaProvider(OpenAIProvider):
    base_url = "http://localhost:11434/v1"
    install_hint = "openai is required for Ollama (OpenAI-compatible API)"

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> None:
        return None
