"""Provider interface and structured-output helpers shared by every LLM backend."""

import json
import os
import re
from abc import ABC, abstractmethod
from typing import Any

SYSTEM_PROMPT = (
    "You are a technical recruiting assistant. Answer precisely and concisely."
)

_OBJECT_INSTRUCTIONS = (
    "\n\nReturn ONLY a JSON object (no markdown, no explanation) that validates "
    "against this JSON schema:\n{schema}"
)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def parse_json_object(raw_text: str) -> dict[str, Any]:
    """Decode an LLM reply into a dict, tolerating ```json fences."""
    cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", raw_text.strip()))

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        msg = f"Failed to parse LLM response as JSON: {e}"
        raise ValueError(msg) from e

    if not isinstance(data, dict):
        msg = f"LLM response is not a JSON object: {type(data).__name__}"
        raise ValueError(msg)
    return data


class LLMProvider(ABC):
    """A chat backend that can answer a prompt and produce schema-shaped objects.

    Subclasses implement complete(); generate_object() is built on top of it.
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Registry name (e.g. 'openai')."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when the caller passes none."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable holding the API key, or None for keyless backends."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Send one user prompt and return the raw reply text.

        Args:
            prompt: User message content.
            model: Model override; None uses default_model.
            system: System prompt override; None uses SYSTEM_PROMPT.
            temperature: Sampling temperature; None leaves the backend default.
        """

    def api_key(self) -> str:
        """Read the API key named by env_var.

        Raises:
            ValueError: If the variable is unset or empty.
        """
        if self.env_var is None:
            return ""
        key = os.environ.get(self.env_var)
        if not key:
            msg = f"{self.env_var} environment variable is required"
            raise ValueError(msg)
        return key

    def resolve(self, model: str | None, system: str | None) -> tuple[str, str]:
        """Apply the model and system-prompt defaults."""
        return model or self.default_model, SYSTEM_PROMPT if system is None else system

    def generate_object(
        self,
        messages: list[dict[str, str]],
        schema: dict[str, Any],
        *,
        temperature: float | None = None,
        model: str | None = None,
    ) -> dict[str, Any]:
        """Ask for a JSON object matching schema and return it decoded.

        System messages are merged into the system prompt; the remaining
        messages become the user prompt.

        Raises:
            ValueError: If the response is not a JSON object or misses a
                required field.
        """
        system_parts = [m["content"] for m in messages if m.get("role") == "system"]
        user_parts = [m["content"] for m in messages if m.get("role") != "system"]
        system = "\n\n".join(system_parts) or SYSTEM_PROMPT
        system += _OBJECT_INSTRUCTIONS.format(schema=json.dumps(schema))

        raw = self.complete(
            "\n\n".join(user_parts), model=model, system=system, temperature=temperature,
        )
        data = parse_json_object(raw)

        missing = [f for f in schema.get("required", []) if f not in data]
        if missing:
            msg = f"LLM response missing required fields: {', '.join(missing)}"
            raise ValueError(msg)
        return data
