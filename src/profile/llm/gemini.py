"""Google Gemini backend (google-genai SDK)."""

import logging

from src.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return "gemini-2.5-flash"

    @property
    def env_var(self) -> str:
        return "GOOGLE_API_KEY"

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
            from google import genai
            from google.genai import types
        except ImportError:
            msg = (
                "google-genai is required for this provider. "
                "Install with: pip install 'candidate-hunter[gemini]'"
            )
            raise ImportError(msg) from None

        use_model, use_system = self.resolve(model, system)

        logger.debug("Gemini request: model=%s, %d prompt chars", use_model, len(prompt))
        response = genai.Client(api_key=key).models.generate_content(
            model=use_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=use_system,
                temperature=temperature,
            ),
        )
        return response.text or ""
