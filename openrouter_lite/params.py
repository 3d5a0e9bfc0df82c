"""Request parameter sets for chat completions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from .prompts import build_user_messages


@dataclass(frozen=True)
class SimpleParams:
    """Optional sampling settings used alongside a model name and a prompt."""

    temperature: Optional[float] = None
    response_schema: Optional[Any] = None

    def to_full(self, model: str, messages: Any) -> "FullParams":
        return FullParams(
            model=model,
            messages=messages,
            temperature=self.temperature,
            response_schema=self.response_schema,
        )


@dataclass(frozen=True)
class FullParams:
    """Complete parameter set sent as the request body."""

    model: str
    messages: Any
    temperature: Optional[float] = None
    response_schema: Optional[Any] = None

    @classmethod
    def build(cls, model: str, messages: Any) -> "FullParams":
        return cls(model=model, messages=messages)

    @classmethod
    def from_prompt(
        cls, model: str, prompt: str, simple: Optional[SimpleParams] = None
    ) -> "FullParams":
        """Build a parameter set from a plain prompt string.

        The prompt becomes a single user message. Temperature and response
        schema are taken from ``simple`` when given.
        """

        messages = build_user_messages(prompt)
        if simple is None:
            return cls.build(model, messages)
        return simple.to_full(model, messages)

    def with_temperature(self, temperature: float) -> "FullParams":
        return replace(self, temperature=temperature)

    def with_response_schema(self, response_schema: Any) -> "FullParams":
        return replace(self, response_schema=response_schema)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": self.messages,
        }
        # Unset optional fields are left out entirely, never sent as null.
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.response_schema is not None:
            payload["response_schema"] = self.response_schema
        return payload
