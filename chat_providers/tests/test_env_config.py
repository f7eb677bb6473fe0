from __future__ import annotations

import json
import os

import pytest

from chat_providers.config import get_provider_config, reset_config_cache
from chat_providers.config.env import (
    ENV_MAP,
    get_env_var_name,
    is_placeholder,
    resolve_base_url,
    resolve_provider_key,
)


def test_env_map_covers_keyed_vendors_only():
    assert ENV_MAP == {"openai": "OPENAI_API_KEY", "anthropic": "ANTHROPIC_API_KEY"}  # nosec B101 - pytest assert in tests
    assert get_env_var_name("OpenAI") == "OPENAI_API_KEY"  # nosec B101 - pytest assert in tests
    assert get_env_var_name("ollama") is None  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize("value", ["sk-placeholder", "ChangeMe", "your-api-key-here", "test_token"])
def test_placeholders_detected(value):
    assert is_placeholder(value)  # nosec B101 - pytest assert in tests


def test_real_key_is_not_placeholder():
    assert not is_placeholder("sk-live-123")  # nosec B101 - pytest assert in tests
    assert not is_placeholder(None)  # nosec B101 - pytest assert in tests


def test_env_key_is_resolved(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-from-env  ")
    assert resolve_provider_key("openai") == ("sk-from-env", "OPENAI_API_KEY")  # nosec B101 - pytest assert in tests
    assert get_provider_config("openai") == {  # nosec B101 - pytest assert in tests
        "base_url": "https://api.openai.com/v1",
        "api_key": "sk-from-env",
    }


def test_placeholder_env_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "your_api_key")
    assert resolve_provider_key("anthropic") == (None, None)  # nosec B101 - pytest assert in tests
    assert "api_key" not in get_provider_config("anthropic")  # nosec B101 - pytest assert in tests


def test_ollama_host_alias(monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
    assert resolve_base_url("ollama") == "http://gpu-box:11434"  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://preferred:11434")
    assert get_provider_config("ollama")["base_url"] == "http://preferred:11434"  # nosec B101 - pytest assert in tests


def test_yaml_config_file_layer(monkeypatch, tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "openai:\n  api_key: sk-from-file\nollama:\n  base_url: http://from-file:11434\n  ignored: 1\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()

    assert get_provider_config("openai")["api_key"] == "sk-from-file"  # nosec B101 - pytest assert in tests
    assert get_provider_config("ollama") == {"base_url": "http://from-file:11434"}  # nosec B101 - pytest assert in tests


def test_environment_beats_file_and_overrides_beat_environment(monkeypatch, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"openai": {"api_key": "sk-file"}}), encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    reset_config_cache()

    assert get_provider_config("openai")["api_key"] == "sk-env"  # nosec B101 - pytest assert in tests
    cfg = get_provider_config("openai", {"api_key": "sk-override", "base_url": None})
    assert cfg["api_key"] == "sk-override"  # nosec B101 - pytest assert in tests
    assert cfg["base_url"] == "https://api.openai.com/v1"  # nosec B101 - pytest assert in tests


def test_dotenv_file_fills_missing_variables(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# comment\nANTHROPIC_API_KEY='sk-ant-dotenv'\n\nNOT_A_PAIR\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    reset_config_cache()
    try:
        assert get_provider_config("anthropic")["api_key"] == "sk-ant-dotenv"  # nosec B101 - pytest assert in tests
    finally:
        os.environ.pop("ANTHROPIC_API_KEY", None)


def test_unknown_vendor_yields_empty_config():
    assert get_provider_config("gemini") == {}  # nosec B101 - pytest assert in tests
