from __future__ import annotations

import pytest

from chat_providers import create
from chat_providers.anthropic import AnthropicProvider
from chat_providers.base.errors import ErrorCode, ProviderError
from chat_providers.base.factory import ProviderFactory, UnknownProviderError, create_provider
from chat_providers.ollama import OllamaProvider
from chat_providers.openai import OpenAIProvider


def test_supported_vendors_in_registration_order():
    assert ProviderFactory.supported() == ("openai", "anthropic", "ollama")  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "name,cls",
    [("openai", OpenAIProvider), ("Anthropic", AnthropicProvider), (" ollama ", OllamaProvider)],
)
def test_create_known_vendor(name, cls, make_settings):
    provider = create_provider(name, settings=make_settings())
    assert isinstance(provider, cls)  # nosec B101 - pytest assert in tests
    provider.dispose()


def test_unknown_vendor():
    with pytest.raises(UnknownProviderError, match="Unknown provider 'gemini'"):
        ProviderFactory.create("gemini")


def test_bad_constructor_arguments():
    with pytest.raises(UnknownProviderError, match="Invalid arguments"):
        ProviderFactory.create("openai", bogus=True)


def test_package_level_create_wraps_unknown_vendor():
    with pytest.raises(ProviderError) as info:
        create("gemini")
    assert info.value.code is ErrorCode.NOT_FOUND  # nosec B101 - pytest assert in tests
