from __future__ import annotations

import pytest

from chat_providers.base.errors import ConfigurationError, ErrorCode, ProviderError
from chat_providers.base.models import Message
from chat_providers.openai import OpenAIProvider
from chat_providers.openai.get_openai_models import CATALOG

GPT_4O = CATALOG[0]


def _chunk(text):
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": {"content": text}}]}


def test_catalog_only_with_api_key(make_settings, keyed_settings):
    assert OpenAIProvider(make_settings()).list_models() == []  # nosec B101 - pytest assert in tests
    ids = [m.identifier for m in OpenAIProvider(keyed_settings).list_models()]
    assert ids == ["openai-gpt-4o", "openai-gpt-4o-mini"]  # nosec B101 - pytest assert in tests
    assert GPT_4O.family == "gpt-4" and GPT_4O.max_input_tokens == 128000  # nosec B101 - pytest assert in tests


def test_streams_deltas_and_builds_request(keyed_settings, mock_http, wire, stream_response):
    body = wire.sse(
        {"choices": [{"delta": {"role": "assistant"}}]},
        _chunk("Hello"),
        _chunk(" world"),
        "[DONE]",
    )
    client, recorder = mock_http(lambda request: stream_response(body, chunk_size=7))
    provider = OpenAIProvider(keyed_settings, http_client=client)

    handle = provider.send_chat_request(
        GPT_4O,
        [Message.system("Be brief."), Message.user("Hi")],
        {"temperature": 0.2, "max_tokens": 64, "top_p": 0.5, "model": "hijack"},
    )

    assert [d.value for d in handle] == ["Hello", " world"]  # nosec B101 - pytest assert in tests
    request = recorder.requests[0]
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"  # nosec B101 - pytest assert in tests
    assert request.headers["authorization"] == "Bearer sk-openai-unit"  # nosec B101 - pytest assert in tests
    assert recorder.bodies()[0] == {  # nosec B101 - pytest assert in tests
        "model": "gpt-4o",
        "messages": [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Hi"},
        ],
        "stream": True,
        "max_tokens": 64,
        "temperature": 0.2,
        "top_p": 0.5,
    }
    assert handle.result.result(timeout=1).emitted == 2  # nosec B101 - pytest assert in tests


def test_missing_key_fails_before_network(make_settings, mock_http):
    client, recorder = mock_http(lambda request: pytest.fail("no request expected"))
    provider = OpenAIProvider(make_settings(), http_client=client)
    with pytest.raises(ConfigurationError, match="OpenAI API key not configured"):
        provider.send_chat_request(GPT_4O, [Message.user("Hi")])
    assert recorder.requests == []  # nosec B101 - pytest assert in tests


def test_invalid_options_fail_synchronously(keyed_settings, mock_http):
    client, recorder = mock_http(lambda request: pytest.fail("no request expected"))
    provider = OpenAIProvider(keyed_settings, http_client=client)
    with pytest.raises(ProviderError) as info:
        provider.send_chat_request(GPT_4O, [Message.user("Hi")], {"temperature": 9})
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101 - pytest assert in tests
    assert recorder.requests == []  # nosec B101 - pytest assert in tests


def test_http_error_surfaces_on_iteration(keyed_settings, mock_http):
    import httpx

    from chat_providers.base.errors import TransportError

    client, _ = mock_http(lambda request: httpx.Response(500, text="upstream exploded"))
    handle = OpenAIProvider(keyed_settings, http_client=client).send_chat_request(GPT_4O, [Message.user("Hi")])
    with pytest.raises(TransportError, match="openai API error: 500"):
        list(handle)
    assert isinstance(handle.result.exception(timeout=1), TransportError)  # nosec B101 - pytest assert in tests


def test_settings_edit_applies_to_next_request(make_settings, mock_http, wire, stream_response):
    settings = make_settings(openai={"api_key": "sk-first"})
    client, recorder = mock_http(lambda request: stream_response(wire.sse(_chunk("x"), "[DONE]")))
    provider = OpenAIProvider(settings, http_client=client)
    changes = []
    provider.on_did_change(changes.append)

    settings.update("openai", api_key="sk-second", base_url="https://proxy.invalid/v1/")
    provider.send_chat_request(GPT_4O, [Message.user("Hi")]).text()

    assert changes == ["openai"]  # nosec B101 - pytest assert in tests
    request = recorder.requests[0]
    assert str(request.url) == "https://proxy.invalid/v1/chat/completions"  # nosec B101 - pytest assert in tests
    assert request.headers["authorization"] == "Bearer sk-second"  # nosec B101 - pytest assert in tests
