"""Anthropic Messages API backend."""

import logging

from src.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

MAX_TOKENS = 1024


class AnthropicProvider(LLMProvider):
    @property
    def provider_id(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def env_var(self) -> str:
        return "ANTHROPIC_API_KEY"

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
        temperature: float | None = None,
    ) -> str:
        key = self.api_key()
        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for this provider. "
                "Install with: pip install 'candidate-hunter[anthropic]'"
            )
            raise ImportError(msg) from None

        use_model, use_system = self.resolve(model, system)
        extra = {} if temperature is None else {"temperature": temperature}

        logger.debug("Anthropic request: model=%s, %d prompt chars", use_model, len(prompt))
        message = anthropic.Anthropic(api_key=key).messages.create(
            model=use_model,
            max_tokens=MAX_TOKENS,
            system=use_system,
            messages=[{"role": "user", "content": prompt}],
            **extra,
        )
        return message.content[0].text  # type: ignore[union-attr]
