"""Compose prompts in the user's editor."""

from __future__ import annotations

import contextlib
import os
import shlex
import subprocess
import tempfile


class EditorError(RuntimeError):
    """Raised when the editor cannot be opened."""


def compose_prompt(editor: str, initial_text: str = "") -> str:
    """Open ``editor`` on a scratch prompt file and return what was saved.

    ``editor`` may carry arguments, e.g. ``"code --wait"``. The scratch file
    is removed whether or not the editor succeeds.
    """

    command = shlex.split(editor)
    if not command:
        raise EditorError("EDITOR is not set.")

    fd, path = tempfile.mkstemp(prefix="openrouter-prompt-", suffix=".md")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(initial_text)

        try:
            subprocess.run([*command, path], check=True)
        except FileNotFoundError as exc:
            raise EditorError(f"Editor not found: {command[0]}") from exc
        except subprocess.CalledProcessError as exc:
            raise EditorError(
                f"Editor exited with status {exc.returncode}; prompt discarded."
            ) from exc

        with open(path, "r", encoding="utf-8") as handle:
            return handle.read().strip()
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.remove(path)
