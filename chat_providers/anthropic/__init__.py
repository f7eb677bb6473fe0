"""
Anthropic provider package.

Exports:
- AnthropicProvider: adapter for the Messages API SSE stream
"""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
