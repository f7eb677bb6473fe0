"""CLI parser construction for chat-providers.

Wires subparsers only; execution lives in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``models`` and ``chat`` subcommands.

    No I/O happens here.
    """
    p = argparse.ArgumentParser(
        prog="chat-providers", description="List models and stream chat replies from configured vendors"
    )
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    p.add_argument("--log-file", default=None, help="Also write logs to this file (rotated)")
    sub = p.add_subparsers(dest="cmd", required=True)

    # models
    p_models = sub.add_parser("models", help="List the models every vendor currently offers")
    p_models.add_argument("--vendor", default=None, help="Only refresh and list this vendor")
    p_models.add_argument("--json", action="store_true")

    # chat
    p_chat = sub.add_parser("chat", help="Stream one reply to stdout (Ctrl-C cancels)")
    p_chat.add_argument("--model", default=None, help="Model identifier (default model when omitted)")
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=None, help="Optional system instruction")
    p_chat.add_argument("--max-tokens", type=int, default=None)
    p_chat.add_argument("--temperature", type=float, default=None)
    p_chat.add_argument("--json", action="store_true", help="Print the final ChatResult as JSON to stderr")

    return p
