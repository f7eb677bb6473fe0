"""chat-providers command line (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; no provider logic
lives here.

Public API:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import handle_chat, handle_models
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """Parse ``argv`` (``sys.argv[1:]`` when ``None``) and run the subcommand.

    Returns the process exit code.
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    if args.cmd == "models":
        return handle_models(args)
    return handle_chat(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
