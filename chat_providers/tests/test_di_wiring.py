from __future__ import annotations

import httpx

from chat_providers.base.models import Message
from chat_providers.di import ProvidersContainer, build_container

TAGS = {"models": [{"name": "llama3.1:8b"}]}


def _handler(wire):
    def handle(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/tags":
            return httpx.Response(200, json=TAGS)
        if request.url.path == "/api/chat":
            return httpx.Response(200, content=wire.ndjson({"message": {"content": "local"}, "done": True}))
        if request.url.path.endswith("/chat/completions"):
            body = wire.sse({"choices": [{"delta": {"content": "cloud"}}]}, "[DONE]")
            return httpx.Response(200, content=body)
        return httpx.Response(404)

    return handle


def test_container_registers_builtin_vendors(make_settings, mock_http, wire):
    client, _ = mock_http(_handler(wire))
    with ProvidersContainer(make_settings(), http_client=client) as container:
        assert container.registry.vendor_ids() == ["openai", "anthropic", "ollama"]  # nosec B101 - pytest assert in tests
        ids = [m.identifier for m in container.directory.list_models()]
        assert ids == ["ollama-llama3_dot_1_colon_8b"]  # nosec B101 - pytest assert in tests
        assert container.directory.select_default().vendor == "ollama"  # nosec B101 - pytest assert in tests


def test_dispatcher_routes_by_model(keyed_settings, mock_http, wire):
    client, recorder = mock_http(_handler(wire))
    with ProvidersContainer(keyed_settings, http_client=client) as container:
        assert container.dispatcher.send("openai-gpt-4o-mini", [Message.user("q")]).text() == "cloud"  # nosec B101 - pytest assert in tests
        assert container.dispatcher.send("ollama-llama3_dot_1_colon_8b", [Message.user("q")]).text() == "local"  # nosec B101 - pytest assert in tests
        assert container.dispatcher.send_default([Message.user("q")]).text() == "local"  # nosec B101 - pytest assert in tests
    models_sent = [b["model"] for b in recorder.bodies()]
    assert models_sent == ["gpt-4o-mini", "llama3.1:8b", "llama3.1:8b"]  # nosec B101 - pytest assert in tests


def test_dispose_empties_registry(make_settings, mock_http, wire):
    client, _ = mock_http(_handler(wire))
    container = ProvidersContainer(make_settings(), http_client=client)
    settings = container.settings
    container.dispose()
    assert len(container.registry) == 0  # nosec B101 - pytest assert in tests
    assert container.directory.list_models() == []  # nosec B101 - pytest assert in tests
    assert settings.on_did_change.listener_count == 0  # nosec B101 - pytest assert in tests


def test_build_container_loads_models_without_auto_refresh(make_settings, mock_http, wire):
    client, _ = mock_http(_handler(wire))
    container = build_container(make_settings(), http_client=client, vendors=("ollama",), auto_refresh=False)
    try:
        assert [m.vendor for m in container.directory.list_models()] == ["ollama"]  # nosec B101 - pytest assert in tests
    finally:
        container.dispose()
