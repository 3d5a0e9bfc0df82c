"""Completion reply wrapper and text extraction."""

from __future__ import annotations

import json
import logging
import unicodedata
from typing import Any

from .errors import NoResponseError

logger = logging.getLogger(__name__)


def clean_string(text: str) -> str:
    """Trim surrounding double quotes and drop control characters."""

    body = text.lstrip('"')
    trimmed = body.rstrip('"')
    # An escaped quote at the very end belongs to the content.
    if len(trimmed) < len(body) and trimmed.endswith("\\"):
        trimmed += '"'
    return "".join(ch for ch in trimmed if unicodedata.category(ch) != "Cc")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


class OpenRouterResponse:
    """Decoded reply from the chat completions endpoint."""

    def __init__(self, response_map: dict[str, Any]) -> None:
        self.response_map = response_map

    @property
    def choice_count(self) -> int:
        choices = self.response_map.get("choices")
        if isinstance(choices, list):
            return len(choices)
        return 0

    def _first_content(self) -> Any:
        choices = self.response_map.get("choices")
        if isinstance(choices, list) and choices:
            choice = choices[0]
            if isinstance(choice, dict):
                message = choice.get("message")
                if isinstance(message, dict) and "content" in message:
                    return message["content"]

        detail = "Expected at least one result for LLM call."
        error = self.response_map.get("error")
        if isinstance(error, dict) and error.get("message"):
            detail = f"{detail} OpenRouter error: {error['message']}"
        raise NoResponseError(detail)

    def get_raw_response(self) -> Any:
        """Return the first choice's message content without any cleaning."""

        return self._first_content()

    def get_response(self) -> str:
        """Return the text of the first choice, cleaned for display.

        Only a single, non-batched completion is expected. Extra choices are
        ignored with a warning.
        """

        content = self._first_content()
        if self.choice_count > 1:
            logger.warning(
                "Reply contains %d choices; using the first one.", self.choice_count
            )
        return clean_string(_as_text(content)).replace('\\"', '"')
