"""OpenRouter chat completions client."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from .errors import SerializationError, TransportError
from .params import FullParams, SimpleParams
from .response import OpenRouterResponse

logger = logging.getLogger(__name__)

API_URL = "https://openrouter.ai/api/v1/chat/completions"


class OpenRouterClient:
    """Minimal OpenRouter client for chat completions.

    Calls keep no state on the client: each one builds its own payload and
    reply. The HTTP session is the only shared object, and requests does not
    guarantee that a session is thread-safe. Threads that need that guarantee
    should each use their own client, or pass in their own ``session``.
    """

    def __init__(
        self,
        api_key: str,
        timeout: Optional[float] = None,
        api_url: str = API_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._api_url = api_url
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "OpenRouterClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def complex_call(self, params: FullParams) -> OpenRouterResponse:
        """Send a full parameter set and return the decoded reply."""

        try:
            body = json.dumps(params.to_payload(), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError("Failed to encode request payload as JSON.") from exc

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = self._session.post(
                self._api_url,
                data=body,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise TransportError("Failed to call OpenRouter API.") from exc

        if response.status_code >= 400:
            raise TransportError(
                f"OpenRouter API error {response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise SerializationError("OpenRouter response is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise SerializationError(
                f"OpenRouter response is not a JSON object: {type(data).__name__}"
            )

        logger.debug("OpenRouter response for model %s: %r", params.model, data)
        return OpenRouterResponse(data)

    def call(
        self, model: str, prompt: str, params: Optional[SimpleParams] = None
    ) -> OpenRouterResponse:
        """Send a single user prompt to ``model``."""

        return self.complex_call(FullParams.from_prompt(model, prompt, params))
