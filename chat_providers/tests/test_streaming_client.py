"""StreamingRequestClient: status handling, cancellation binding, cleanup."""
from __future__ import annotations

import threading
import time

import httpx
import pytest

from chat_providers.base.cancellation import CancellationToken
from chat_providers.base.errors import ErrorCode, TransportError
from chat_providers.base.streaming import OLLAMA_PROFILE, OPENAI_PROFILE, StreamingRequestClient, StreamRequest

REQUEST = StreamRequest(url="https://llm.invalid/v1/chat/completions", body={"model": "m", "stream": True})


def _chunk(text):
    return {"choices": [{"delta": {"content": text}}]}


def test_yields_deltas_across_arbitrary_chunking(mock_http, wire, stream_response):
    body = wire.sse(_chunk("Hel"), _chunk("lo"), "[DONE]")
    client, recorder = mock_http(lambda request: stream_response(body, chunk_size=3))
    streamer = StreamingRequestClient(OPENAI_PROFILE, http_client=client)

    values = [d.value for d in streamer.stream(REQUEST)]

    assert values == ["Hel", "lo"]  # nosec B101 - pytest assert in tests
    assert recorder.bodies() == [{"model": "m", "stream": True}]  # nosec B101 - pytest assert in tests


def test_nothing_is_sent_until_iteration(mock_http, wire, stream_response):
    client, recorder = mock_http(lambda request: stream_response(wire.sse(_chunk("x"))))
    gen = StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST)
    assert recorder.requests == []  # nosec B101 - pytest assert in tests
    assert next(gen).value == "x"  # nosec B101 - pytest assert in tests
    assert len(recorder.requests) == 1  # nosec B101 - pytest assert in tests


def test_non_success_status_raises_transport_error(mock_http):
    client, _ = mock_http(lambda request: httpx.Response(401, json={"error": "bad key"}))
    streamer = StreamingRequestClient(OPENAI_PROFILE, http_client=client)

    with pytest.raises(TransportError) as info:
        list(streamer.stream(REQUEST))

    err = info.value
    assert err.status_code == 401  # nosec B101 - pytest assert in tests
    assert err.code is ErrorCode.AUTH  # nosec B101 - pytest assert in tests
    assert "Unauthorized" in err.message  # nosec B101 - pytest assert in tests
    assert err.retryable is False  # nosec B101 - pytest assert in tests


def test_rate_limit_is_flagged_retryable(mock_http):
    client, _ = mock_http(lambda request: httpx.Response(429, text="slow down"))
    with pytest.raises(TransportError) as info:
        list(StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST))
    assert info.value.code is ErrorCode.RATE_LIMIT and info.value.retryable  # nosec B101 - pytest assert in tests


def test_empty_body_is_a_transport_error(mock_http):
    client, _ = mock_http(lambda request: httpx.Response(204))
    with pytest.raises(TransportError, match="No response body"):
        list(StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST))


def test_connect_failure_becomes_transport_error(mock_http):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = mock_http(refuse)
    with pytest.raises(TransportError) as info:
        list(StreamingRequestClient(OLLAMA_PROFILE, http_client=client).stream(REQUEST))
    assert info.value.code is ErrorCode.UNAVAILABLE  # nosec B101 - pytest assert in tests


def test_cancel_mid_stream_stops_and_closes_response(mock_http, wire, stream_factory):
    token = CancellationToken()
    body = stream_factory([wire.sse(_chunk("one")), wire.sse(_chunk("two")), wire.sse(_chunk("three"))])
    client, _ = mock_http(lambda request: httpx.Response(200, stream=body))
    streamer = StreamingRequestClient(OPENAI_PROFILE, http_client=client)

    received = []
    for delta in streamer.stream(REQUEST, token):
        received.append(delta.value)
        token.cancel("user stop")

    assert received == ["one"]  # nosec B101 - pytest assert in tests
    assert body.closed is True  # nosec B101 - pytest assert in tests
    assert token.callback_count == 0  # nosec B101 - pytest assert in tests


def test_transport_fault_after_cancel_ends_cleanly(mock_http, wire, stream_factory):
    token = CancellationToken()
    body = stream_factory([
        wire.sse(_chunk("a")),
        lambda: token.cancel("abort"),
        httpx.ReadError("socket closed"),
    ])
    client, _ = mock_http(lambda request: httpx.Response(200, stream=body))

    values = [d.value for d in StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST, token)]

    assert values == ["a"]  # nosec B101 - pytest assert in tests


def test_transport_fault_without_cancel_is_raised(mock_http, wire, stream_factory):
    body = stream_factory([wire.sse(_chunk("a")), httpx.ReadError("reset by peer")])
    client, _ = mock_http(lambda request: httpx.Response(200, stream=body))
    gen = StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST)

    assert next(gen).value == "a"  # nosec B101 - pytest assert in tests
    with pytest.raises(TransportError, match="stream interrupted"):
        next(gen)


def test_already_cancelled_token_sends_nothing(mock_http, wire, stream_response):
    token = CancellationToken()
    token.cancel()
    client, recorder = mock_http(lambda request: stream_response(wire.sse(_chunk("x"))))
    assert list(StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST, token)) == []  # nosec B101 - pytest assert in tests
    assert recorder.requests == []  # nosec B101 - pytest assert in tests


def test_abandoned_generator_releases_response(mock_http, wire, stream_factory):
    token = CancellationToken()
    body = stream_factory([wire.sse(_chunk("a"), _chunk("b"))])
    client, _ = mock_http(lambda request: httpx.Response(200, stream=body))
    gen = StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST, token)

    next(gen)
    gen.close()

    assert body.closed is True  # nosec B101 - pytest assert in tests
    assert token.callback_count == 0  # nosec B101 - pytest assert in tests


def test_cancel_while_waiting_for_headers_returns_promptly(mock_http, wire, stream_response):
    release = threading.Event()

    def stalled(request):
        release.wait(5)
        return stream_response(wire.sse(_chunk("late")))

    client, recorder = mock_http(stalled)
    token = CancellationToken()
    timer = threading.Timer(0.1, token.cancel, args=("user stop",))
    timer.start()
    started = time.monotonic()
    try:
        values = [d.value for d in StreamingRequestClient(OPENAI_PROFILE, http_client=client).stream(REQUEST, token)]
        elapsed = time.monotonic() - started
    finally:
        release.set()
        timer.cancel()

    assert values == []  # nosec B101 - pytest assert in tests
    assert elapsed < 1.0  # nosec B101 - pytest assert in tests
    assert len(recorder.requests) == 1  # nosec B101 - pytest assert in tests
    assert token.callback_count == 0  # nosec B101 - pytest assert in tests


def test_connect_failure_after_cancel_ends_cleanly(mock_http):
    token = CancellationToken()

    def refuse(request):
        token.cancel("gave up")
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = mock_http(refuse)
    assert list(StreamingRequestClient(OLLAMA_PROFILE, http_client=client).stream(REQUEST, token)) == []  # nosec B101 - pytest assert in tests
