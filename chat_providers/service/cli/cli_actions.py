"""CLI subcommand handlers.

Handlers receive parsed ``argparse`` namespaces and a container factory so
tests can inject a container wired to ``httpx.MockTransport``. Errors are
written to stderr as one JSON object and mapped to a non-zero exit code;
nothing is raised to the caller.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable, Dict, List, Optional, TextIO

from ...base.cancellation import CancellationToken
from ...base.errors import ProviderError
from ...base.models import Message, ModelDescriptor
from ...di import ProvidersContainer

ContainerFactory = Callable[[], ProvidersContainer]

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


def default_container() -> ProvidersContainer:
    return ProvidersContainer(auto_refresh=False)


def _emit_error(err: TextIO, exc: ProviderError) -> None:
    payload = {"error": exc.code.value, "provider": exc.provider, "model": exc.model, "message": exc.message}
    err.write(json.dumps({k: v for k, v in payload.items() if v is not None}) + "\n")


def format_models_table(models: List[ModelDescriptor]) -> str:
    """Plain-text listing: default marker, identifier, vendor, display name."""
    if not models:
        return "(no models available)"
    width = max(len(m.identifier) for m in models)
    lines = []
    for m in models:
        marker = "*" if m.is_default else (" " if m.is_user_selectable else "-")
        lines.append(f"{marker} {m.identifier.ljust(width)}  {m.vendor:<10} {m.name}")
    return "\n".join(lines)


def handle_models(
    args: argparse.Namespace,
    *,
    make_container: ContainerFactory = default_container,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out, err = out or sys.stdout, err or sys.stderr
    with make_container() as container:
        try:
            if args.vendor:
                container.directory.refresh(args.vendor)
            else:
                container.directory.refresh_all()
        except ProviderError as exc:
            _emit_error(err, exc)
            return EXIT_ERROR
        models = container.directory.list_models()
        if args.vendor:
            models = [m for m in models if m.vendor == args.vendor]
        if args.json:
            out.write(json.dumps([m.to_dict() for m in models], indent=2) + "\n")
        else:
            out.write(format_models_table(models) + "\n")
    return EXIT_OK


def build_messages(prompt: str, system: Optional[str]) -> List[Message]:
    messages = [Message.system(system)] if system else []
    messages.append(Message.user(prompt))
    return messages


def handle_chat(
    args: argparse.Namespace,
    *,
    make_container: ContainerFactory = default_container,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Stream a reply to ``out``; Ctrl-C cancels the request cleanly."""
    out, err = out or sys.stdout, err or sys.stderr
    options: Dict[str, object] = {}
    if args.max_tokens is not None:
        options["max_tokens"] = args.max_tokens
    if args.temperature is not None:
        options["temperature"] = args.temperature
    token = CancellationToken()
    with make_container() as container:
        try:
            container.directory.refresh_all()
            model = args.model or container.directory.select_default().identifier
            handle = container.dispatcher.send(model, build_messages(args.prompt, args.system), options, token)
            with handle:
                try:
                    for delta in handle:
                        out.write(delta.value)
                        out.flush()
                except KeyboardInterrupt:
                    handle.cancel("interrupted")
            out.write("\n")
            result = handle.result.result()
        except ProviderError as exc:
            _emit_error(err, exc)
            return EXIT_ERROR
    if args.json:
        err.write(json.dumps(result.to_dict()) + "\n")
    return EXIT_CANCELLED if result.cancelled else EXIT_OK


__all__ = [
    "ContainerFactory",
    "default_container",
    "format_models_table",
    "build_messages",
    "handle_models",
    "handle_chat",
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_CANCELLED",
]
