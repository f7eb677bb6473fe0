"""
Ollama provider package.

Exports:
- OllamaProvider: adapter for a local Ollama daemon (NDJSON streaming)
"""

from .client import OllamaProvider

__all__ = ["OllamaProvider"]
