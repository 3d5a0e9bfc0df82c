"""CLI entrypoint for openrouter-lite."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

import typer
from dotenv import load_dotenv

from .editor import EditorError, compose_prompt
from .errors import OpenRouterError
from .openrouter_client import OpenRouterClient
from .params import SimpleParams

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise typer.BadParameter(f"Missing env var: {name}")
    return value


def _load_response_schema(value: str) -> Any:
    """Parse ``--response-schema`` as JSON text, or ``@path`` to a JSON file."""
    if value.startswith("@"):
        path = value[1:]
        try:
            with open(path, "r", encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise typer.BadParameter(f"Cannot read response schema file: {path}") from exc
    else:
        text = value
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Response schema is not valid JSON: {exc}") from exc


def _resolve_timeout(timeout: Optional[float]) -> Optional[float]:
    if timeout is not None:
        return timeout
    raw = os.getenv("OPENROUTER_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid OPENROUTER_TIMEOUT: {raw!r}") from exc


@app.command()
def ask(
    prompt: Optional[str] = typer.Argument(
        None, help="Prompt text. Opens $EDITOR when omitted."
    ),
    model: Optional[str] = typer.Option(
        None, "--model", help="OpenRouter model override"
    ),
    temperature: Optional[float] = typer.Option(None, "--temperature", min=0.0),
    response_schema: Optional[str] = typer.Option(
        None,
        "--response-schema",
        help="JSON schema text, or @path to a JSON file",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.0, help="Request timeout in seconds"
    ),
    raw: bool = typer.Option(False, "--raw", help="Print content without cleaning"),
    debug: bool = typer.Option(False, "--debug", help="Log the decoded reply"),
) -> None:
    """Send one prompt to OpenRouter and print the reply."""

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    load_dotenv()

    api_key = _require_env("OPENROUTER_API_KEY")
    if not model:
        model = os.getenv("OPENROUTER_MODEL", "")
    if not model:
        raise typer.BadParameter("OPENROUTER_MODEL or --model is required.")

    schema = _load_response_schema(response_schema) if response_schema else None
    request_timeout = _resolve_timeout(timeout)

    if prompt is None:
        try:
            prompt = compose_prompt(os.getenv("EDITOR", ""))
        except EditorError as exc:
            logger.exception("Editor error")
            raise typer.BadParameter(str(exc)) from exc

    if not prompt.strip():
        typer.echo("Empty prompt, aborting.")
        raise typer.Exit(code=0)

    params = SimpleParams(temperature=temperature, response_schema=schema)
    with OpenRouterClient(api_key=api_key, timeout=request_timeout) as client:
        try:
            response = client.call(model, prompt, params)
            if raw:
                content = response.get_raw_response()
                text = content if isinstance(content, str) else json.dumps(content)
            else:
                text = response.get_response()
        except OpenRouterError as exc:
            logger.exception("Failed to create chat completion via OpenRouter")
            raise typer.BadParameter(str(exc)) from exc

    typer.echo(text)


if __name__ == "__main__":
    app()
