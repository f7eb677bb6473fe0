from __future__ import annotations

from chat_providers.base.dispatch import Dispatcher
from chat_providers.base.errors import ConfigurationError
from chat_providers.base.registry import ModelDirectory, ProviderRegistry
from chat_providers.service.chat_agent import ChatAgent


def _agent(*providers):
    registry = ProviderRegistry()
    for p in providers:
        registry.register(p.vendor_id, p)
    directory = ModelDirectory(registry)
    directory.refresh_all()
    return ChatAgent(Dispatcher(directory))


def test_streams_reply_through_progress(fake_provider, make_descriptor):
    provider = fake_provider("ollama", [make_descriptor("ollama-a", "ollama", is_default=True)], deltas=("Hi", "!"))
    progress = []

    result = _agent(provider).invoke("hello", progress.append)

    assert progress == ["Hi", "!"]  # nosec B101 - pytest assert in tests
    assert result.ok  # nosec B101 - pytest assert in tests
    assert result.metadata == {"model": "ollama-a", "emitted": 2, "cancelled": False}  # nosec B101 - pytest assert in tests
    (_, messages, _) = provider.sent[0]
    assert [(m.role.value, m.text()) for m in messages] == [("user", "hello")]  # nosec B101 - pytest assert in tests


def test_no_models_reports_message(fake_provider):
    progress = []
    result = _agent(fake_provider("openai")).invoke("hello", progress.append)
    assert progress == ["No language models are available. Check the provider configuration."]  # nosec B101 - pytest assert in tests
    assert result.error_details == {"message": "No language models available"}  # nosec B101 - pytest assert in tests
    assert not result.ok  # nosec B101 - pytest assert in tests


def test_provider_error_is_reported_not_raised(fake_provider, make_descriptor):
    provider = fake_provider("openai", [make_descriptor("openai-gpt-4o", "openai")])

    def refuse(*_args, **_kwargs):
        raise ConfigurationError(message="OpenAI API key not configured", provider="openai")

    provider.send_chat_request = refuse
    progress = []

    result = _agent(provider).invoke("hello", progress.append)

    assert progress == ["Error: OpenAI API key not configured"]  # nosec B101 - pytest assert in tests
    assert result.error_details == {  # nosec B101 - pytest assert in tests
        "message": "OpenAI API key not configured",
        "code": "configuration",
        "provider": "openai",
    }
