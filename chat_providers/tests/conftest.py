"""Pytest configuration for the chat providers test suite.

HTTP never leaves the process: adapters receive an ``httpx.Client`` backed by
``httpx.MockTransport``, and streamed bodies are produced by
:class:`ChunkedStream`, which hands the client arbitrary byte boundaries.
Environment-driven configuration is isolated per test.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

import httpx
import pytest

from chat_providers.base.http import close_all_clients
from chat_providers.config import DEFAULTS, reset_config_cache
from chat_providers.config.settings import ProviderSettings

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "OLLAMA_BASE_URL",
    "OLLAMA_HOST",
    "PROVIDERS_CONFIG_FILE",
)

Chunk = Union[bytes, BaseException, Callable[[], None]]


class ChunkedStream(httpx.SyncByteStream):
    """Response body delivered in caller-chosen pieces.

    Items may be ``bytes`` (yielded), an exception (raised), or a zero-arg
    callable (invoked between reads, e.g. to cancel a token mid-body).
    """

    def __init__(self, chunks: Iterable[Chunk]) -> None:
        self._chunks: List[Chunk] = list(chunks)
        self.closed = False
        self.delivered = 0

    def __iter__(self) -> Iterator[bytes]:
        for item in self._chunks:
            if self.closed:
                return
            if isinstance(item, BaseException):
                raise item
            if callable(item):
                item()
                continue
            self.delivered += 1
            yield item

    def close(self) -> None:
        self.closed = True


def sse(*payloads: Any) -> bytes:
    """Encode payloads as ``data: <json>`` lines (strings are used verbatim)."""
    lines = []
    for p in payloads:
        body = p if isinstance(p, str) else json.dumps(p)
        lines.append(f"data: {body}\n")
    return "".join(lines).encode("utf-8")


def ndjson(*payloads: Dict[str, Any]) -> bytes:
    return "".join(json.dumps(p) + "\n" for p in payloads).encode("utf-8")


def split_every(data: bytes, size: int) -> List[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """No real credentials, config files or dotenv leak into a test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def stream_factory():
    return ChunkedStream


@pytest.fixture()
def wire():
    """Namespace of body encoders: ``wire.sse``, ``wire.ndjson``, ``wire.split_every``."""
    return type("Wire", (), {
        "sse": staticmethod(sse),
        "ndjson": staticmethod(ndjson),
        "split_every": staticmethod(split_every),
    })


class RecordingTransport:
    """Mock transport that records requests and delegates to a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.content]


@pytest.fixture()
def mock_http():
    """Build ``(client, recorder)`` pairs around a request handler."""
    clients: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        recorder = RecordingTransport(handler)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield _make
    for c in clients:
        c.close()


@pytest.fixture()
def make_settings():
    """``ProviderSettings`` from explicit per-vendor values (env is ignored)."""

    def _make(**vendors: Dict[str, Any]) -> ProviderSettings:
        def resolver(vendor: str) -> Dict[str, Any]:
            return {**DEFAULTS.get(vendor, {}), **vendors.get(vendor, {})}

        return ProviderSettings(resolver=resolver)

    return _make


@pytest.fixture()
def keyed_settings(make_settings) -> ProviderSettings:
    return make_settings(openai={"api_key": "sk-openai-unit"}, anthropic={"api_key": "sk-ant-unit"})


def _stream_response(body: bytes, chunk_size: Optional[int] = None) -> httpx.Response:
    chunks = split_every(body, chunk_size) if chunk_size else [body]
    return httpx.Response(200, stream=ChunkedStream(chunks))


@pytest.fixture()
def stream_response():
    """``stream_response(body, chunk_size=None)`` -> 200 response with a chunked body."""
    return _stream_response


class FakeProvider:
    """In-memory provider: fixed descriptor list, canned deltas, change events."""

    def __init__(self, vendor_id: str, models=(), *, deltas=("ok",), fail_listing: Optional[Exception] = None):
        from chat_providers.base.lifecycle import Emitter

        self.vendor_id = vendor_id
        self.models = list(models)
        self.deltas = list(deltas)
        self.fail_listing = fail_listing
        self.sent: List[Any] = []
        self.on_did_change: "Emitter[str]" = Emitter(f"{vendor_id}.did_change")

    def list_models(self):
        if self.fail_listing is not None:
            raise self.fail_listing
        return list(self.models)

    def send_chat_request(self, descriptor, messages, options=None, token=None):
        from chat_providers.base.cancellation import CancellationToken
        from chat_providers.base.logging import LogContext
        from chat_providers.base.models import TextDelta
        from chat_providers.base.streaming import StreamHandle

        self.sent.append((descriptor, tuple(messages), options))

        def source():
            for value in self.deltas:
                yield TextDelta(value)

        return StreamHandle(
            source,
            token=token.child() if token is not None else CancellationToken(),
            ctx=LogContext(provider=self.vendor_id, model=descriptor.identifier),
        )


def descriptor(identifier: str, vendor: str, **overrides: Any):
    from chat_providers.base.models import ModelDescriptor

    fields = {"name": identifier, "model_id": identifier, "family": "test"}
    fields.update(overrides)
    return ModelDescriptor(identifier=identifier, vendor=vendor, **fields)


@pytest.fixture()
def fake_provider():
    """``fake_provider(vendor_id, models=(), **kwargs)`` -> :class:`FakeProvider`."""
    return FakeProvider


@pytest.fixture()
def make_descriptor():
    return descriptor
