"""Prompt helpers."""

from __future__ import annotations

from typing import Any


def build_user_messages(prompt: str) -> list[dict[str, Any]]:
    """Wrap a plain prompt into a single user message with one text part."""

    return [
        {
            "role": "user",
            "content": [{"type": "text", "text": prompt}],
        }
    ]
