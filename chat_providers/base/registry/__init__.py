"""Provider registry and model directory."""

from .provider_registry import Binding, ProviderRegistry
from .model_directory import ModelDirectory

__all__ = ["Binding", "ProviderRegistry", "ModelDirectory"]
