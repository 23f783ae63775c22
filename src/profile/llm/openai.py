"""OpenAI chat-completions backend.

Also the base for any OpenAI-compatible server (see ollama.py): subclasses
set base_url and, when the server needs no key, env_var = None.
"""

import logging

from src.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    base_url: str | None = None
    install_hint = "openai is required for this provider"

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    @property
    def env_var(self) -> str | None:
        return "OPENAI_API_KEY"

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
        temperature: float | None = None,
    ) -> str:
        key = self.api_key() or self.provider_id
        try:
            import openai
        except ImportError:
            msg = f"{self.install_hint}. Install with: pip install 'candidate-hunter[openai]'"
            raise ImportError(msg) from None

        use_model, use_system = self.resolve(model, system)
        extra = {} if temperature is None else {"temperature": temperature}

        logger.debug("%s request: model=%s, %d prompt chars", self.provider_id, use_model, len(prompt))
        client = openai.OpenAI(api_key=key, base_url=self.base_url)
        response = client.chat.completions.create(
            model=use_model,
            messages=[
                {"role": "system", "content": use_system},
                {"role": "user", "content": prompt},
            ],
            **extra,
        )
        return response.choices[0].message.content or ""
