"""
OpenAI provider package.

Exports:
- OpenAIProvider: adapter for the chat-completions SSE stream
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
