"""Tests for the OpenRouter HTTP client."""

import json
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest
import requests

from openrouter_lite.errors import NoResponseError, SerializationError, TransportError
from openrouter_lite.openrouter_client import API_URL, OpenRouterClient
from openrouter_lite.params import FullParams, SimpleParams


def _reply(payload, status_code=200):
    response = MagicMock(status_code=status_code, text=json.dumps(payload))
    response.json.return_value = payload
    return response


def _client(response=None):
    session = MagicMock()
    if response is not None:
        session.post.return_value = response
    return OpenRouterClient(api_key="sk-test", session=session), session


def test_complex_call_posts_payload_with_auth_headers():
    client, session = _client(_reply({"choices": [{"message": {"content": "ok"}}]}))
    params = FullParams.build("m", [{"role": "user", "content": "hi"}]).with_temperature(0.7)

    result = client.complex_call(params)

    assert result.get_response() == "ok"
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args == (API_URL,)
    assert kwargs["headers"] == {
        "Authorization": "Bearer sk-test",
        "Content-Type": "application/json",
    }
    assert kwargs["timeout"] is None
    assert json.loads(kwargs["data"]) == {
        "model": "m",
        "messages": [{"role": "user", "content": "hi"}],
        "temperature": 0.7,
    }


def test_call_synthesizes_user_message():
    client, session = _client(_reply({"choices": [{"message": {"content": "4"}}]}))

    assert client.call("m", "What is 2+2?").get_response() == "4"

    body = json.loads(session.post.call_args.kwargs["data"])
    assert body == {
        "model": "m",
        "messages": [
            {"role": "user", "content": [{"type": "text", "text": "What is 2+2?"}]}
        ],
    }


def test_call_forwards_simple_params():
    client, session = _client(_reply({"choices": [{"message": {"content": "{}"}}]}))
    schema = {"type": "object"}

    client.call("m", "hi", SimpleParams(temperature=0.1, response_schema=schema))

    body = json.loads(session.post.call_args.kwargs["data"])
    assert body["temperature"] == 0.1
    assert body["response_schema"] == schema


def test_timeout_is_passed_through():
    session = MagicMock()
    session.post.return_value = _reply({"choices": []})
    client = OpenRouterClient(api_key="k", timeout=12.5, session=session)
    client.call("m", "hi")
    assert session.post.call_args.kwargs["timeout"] == 12.5


def test_connection_failure_raises_transport_error():
    client, session = _client()
    session.post.side_effect = requests.ConnectionError("boom")
    with pytest.raises(TransportError) as excinfo:
        client.call("m", "hi")
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    assert excinfo.value.status_code is None


def test_http_error_status_raises_transport_error():
    client, _ = _client(_reply({"error": {"message": "Invalid model"}}, status_code=400))
    with pytest.raises(TransportError, match="400") as excinfo:
        client.call("bad/model", "hi")
    assert excinfo.value.status_code == 400


def test_invalid_json_reply_raises_serialization_error():
    response = MagicMock(status_code=200, text="<html>")
    response.json.side_effect = ValueError("Expecting value")
    client, _ = _client(response)
    with pytest.raises(SerializationError):
        client.call("m", "hi")


def test_non_object_reply_raises_serialization_error():
    client, _ = _client(_reply(["not", "a", "map"]))
    with pytest.raises(SerializationError, match="list"):
        client.call("m", "hi")


def test_unencodable_payload_raises_serialization_error():
    client, session = _client()
    with pytest.raises(SerializationError):
        client.complex_call(FullParams.build("m", [object()]))
    with pytest.raises(SerializationError):
        client.complex_call(FullParams.build("m", []).with_temperature(float("nan")))
    session.post.assert_not_called()


def test_empty_choices_surface_at_extraction():
    client, _ = _client(_reply({"choices": []}))
    response = client.call("m", "hi")
    with pytest.raises(NoResponseError):
        response.get_response()


def test_close_only_closes_owned_session():
    external = MagicMock()
    OpenRouterClient(api_key="k", session=external).close()
    external.close.assert_not_called()

    with patch("openrouter_lite.openrouter_client.requests.Session") as session_cls:
        with OpenRouterClient(api_key="k"):
            pass
    session_cls.return_value.close.assert_called_once_with()


def test_concurrent_calls_do_not_interfere():
    session = MagicMock()

    def _echo(url, data, headers, timeout):
        body = json.loads(data)
        text = body["messages"][0]["content"][0]["text"]
        return _reply({"choices": [{"message": {"content": f"echo {text}"}}]})

    session.post.side_effect = _echo
    client = OpenRouterClient(api_key="k", session=session)
    prompts = [f"prompt {i}" for i in range(32)]

    with ThreadPoolExecutor(max_workers=8) as ex:
        results = list(ex.map(lambda p: client.call("m", p).get_response(), prompts))

    assert results == [f"echo {p}" for p in prompts]
