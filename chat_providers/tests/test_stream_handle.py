"""StreamHandle: lazy start, result future, exactly-once teardown."""
from __future__ import annotations

import json
import logging

import pytest

from chat_providers.base.cancellation import CancellationToken
from chat_providers.base.errors import ErrorCode, TransportError
from chat_providers.base.logging import LogContext
from chat_providers.base.models import TextDelta
from chat_providers.base.streaming import StreamHandle


def _events(caplog, name):
    out = []
    for record in caplog.records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if payload.get("event") == name:
            out.append(payload)
    return out


def _handle(values, *, token=None, fail_with=None, calls=None):
    def source():
        if calls is not None:
            calls.append("started")
        for v in values:
            yield TextDelta(v)
        if fail_with is not None:
            raise fail_with

    return StreamHandle(
        source,
        token=token or CancellationToken(),
        ctx=LogContext(provider="openai", model="openai-gpt-4o", request_id="req-1"),
    )


def test_source_starts_only_on_iteration():
    calls = []
    handle = _handle(["a"], calls=calls)
    assert calls == []  # nosec B101 - pytest assert in tests
    assert [d.value for d in handle] == ["a"]  # nosec B101 - pytest assert in tests
    assert calls == ["started"]  # nosec B101 - pytest assert in tests


def test_result_resolves_after_exhaustion(caplog):
    caplog.set_level(logging.INFO, logger="chat_providers")
    handle = _handle(["Hello", " world"])

    assert handle.text() == "Hello world"  # nosec B101 - pytest assert in tests
    result = handle.result.result(timeout=1)
    assert result.emitted == 2  # nosec B101 - pytest assert in tests
    assert result.cancelled is False  # nosec B101 - pytest assert in tests
    assert result.provider == "openai" and result.model == "openai-gpt-4o"  # nosec B101 - pytest assert in tests
    (end,) = _events(caplog, "stream.end")
    assert end["emitted"] == 2 and end["phase"] == "finalize"  # nosec B101 - pytest assert in tests
    assert end["request_id"] == "req-1"  # nosec B101 - pytest assert in tests


def test_error_propagates_and_fails_result(caplog):
    caplog.set_level(logging.INFO, logger="chat_providers")
    err = TransportError(message="boom", provider="openai", code=ErrorCode.TRANSIENT)
    handle = _handle(["partial"], fail_with=err)

    it = iter(handle)
    assert next(it).value == "partial"  # nosec B101 - pytest assert in tests
    with pytest.raises(TransportError):
        next(it)
    assert handle.result.exception(timeout=1) is err  # nosec B101 - pytest assert in tests
    (event,) = _events(caplog, "stream.error")
    assert event["error_code"] == "transient" and event["emitted"] == 1  # nosec B101 - pytest assert in tests


def test_cancel_mid_stream_marks_result_cancelled(caplog):
    caplog.set_level(logging.INFO, logger="chat_providers")
    token = CancellationToken()

    def source():
        for v in ("a", "b", "c"):
            if token.cancelled:
                return
            yield TextDelta(v)

    handle = StreamHandle(source, token=token, ctx=LogContext(provider="ollama", model="ollama-llama3"))
    seen = []
    for delta in handle:
        seen.append(delta.value)
        handle.cancel()
        handle.cancel("second call is ignored")

    assert seen == ["a"]  # nosec B101 - pytest assert in tests
    assert handle.result.result(timeout=1).cancelled is True  # nosec B101 - pytest assert in tests
    assert token.reason == "cancelled by consumer"  # nosec B101 - pytest assert in tests
    assert len(_events(caplog, "stream.cancelled")) == 1  # nosec B101 - pytest assert in tests


def test_close_before_iteration_never_starts_source():
    calls = []
    handle = _handle(["a"], calls=calls)
    handle.close()

    assert list(handle) == []  # nosec B101 - pytest assert in tests
    assert calls == []  # nosec B101 - pytest assert in tests
    assert handle.finished and handle.cancelled  # nosec B101 - pytest assert in tests
    assert handle.result.result(timeout=1).emitted == 0  # nosec B101 - pytest assert in tests


def test_context_manager_closes_abandoned_stream(caplog):
    caplog.set_level(logging.INFO, logger="chat_providers")
    closed = []

    def source():
        try:
            yield TextDelta("one")
            yield TextDelta("two")
        finally:
            closed.append(True)

    with StreamHandle(source, token=CancellationToken(), ctx=LogContext(provider="openai")) as handle:
        assert next(handle).value == "one"  # nosec B101 - pytest assert in tests

    assert closed == [True]  # nosec B101 - pytest assert in tests
    assert handle.cancelled is True  # nosec B101 - pytest assert in tests
    assert handle.emitted == 1  # nosec B101 - pytest assert in tests
    terminal = _events(caplog, "stream.cancelled") + _events(caplog, "stream.end")
    assert len(terminal) == 1  # nosec B101 - pytest assert in tests


def test_parent_token_cancel_reaches_handle():
    parent = CancellationToken()
    handle = _handle(["x"], token=parent.child())
    parent.cancel("shutdown")
    assert handle.cancelled is True  # nosec B101 - pytest assert in tests


def test_cancel_and_close_after_completion_change_nothing(caplog):
    caplog.set_level(logging.INFO, logger="chat_providers")
    handle = _handle(["done"])
    assert handle.text() == "done"  # nosec B101 - pytest assert in tests

    handle.cancel()
    handle.close()
    handle.close()

    result = handle.result.result(timeout=1)
    assert result.cancelled is False and result.emitted == 1  # nosec B101 - pytest assert in tests
    assert len(_events(caplog, "stream.end")) == 1  # nosec B101 - pytest assert in tests
    assert _events(caplog, "stream.cancelled") == []  # nosec B101 - pytest assert in tests
    assert list(handle) == []  # nosec B101 - pytest assert in tests


def test_finished_handle_detaches_from_parent_token():
    parent = CancellationToken()
    handle = _handle(["x"], token=parent.child())
    assert parent.child_count == 1  # nosec B101 - pytest assert in tests

    handle.text()

    assert parent.child_count == 0  # nosec B101 - pytest assert in tests
    parent.cancel("shutdown")
    assert handle.result.result(timeout=1).cancelled is False  # nosec B101 - pytest assert in tests
