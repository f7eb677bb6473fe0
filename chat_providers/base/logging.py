"""Structured logging utilities for the chat provider layer.

Rationale:
- One place configures the shared ``chat_providers`` logger (JSON by default,
  plain text on request) so adapters never set up handlers themselves.
- Events are emitted as single-line JSON payloads via ``log_event`` so the
  stream lifecycle (``stream.start`` .. ``stream.end``) can be grepped and
  aggregated per provider/model.

Environment:
    CHAT_PROVIDERS_LOG_LEVEL   level name for the shared logger (default INFO)
    CHAT_PROVIDERS_LOG_FORMAT  ``json`` (default) or ``plain``
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "chat_providers"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_BASE_LOGGER_ATTR = "_chat_providers_initialized"
_CONSOLE_HANDLER_ATTR = "_chat_providers_console_handler"
_FILE_HANDLER_ATTR = "_chat_providers_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _json_mode_from_env() -> bool:
    return os.getenv("CHAT_PROVIDERS_LOG_FORMAT", "json").strip().lower() != "plain"


def _ensure_base_logger() -> logging.Logger:
    """Initialize (once) and return the shared ``chat_providers`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger
    level = _parse_level(os.getenv("CHAT_PROVIDERS_LOG_LEVEL"))
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(_json_mode_from_env()))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.addHandler(handler)
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return a logger under the shared ``chat_providers`` hierarchy.

    Names not already prefixed are nested (``"providers.ollama"`` becomes
    ``"chat_providers.providers.ollama"``) so child records propagate to the
    single configured handler set.
    """
    base = _ensure_base_logger()
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level (numeric or name). ``None`` keeps the current level.
    file_path: Optional[str]
        Attach (or retarget) a rotating file handler writing to ``file_path``.
        ``None`` removes a previously attached managed file handler.
    json_mode: bool
        Formatter used by all managed handlers.

    Returns
    -------
    logging.Logger
        The shared logger.

    Notes
    -----
    Only handlers created by this module are touched; user-attached handlers
    are preserved.
    """
    logger = _ensure_base_logger()
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    for h in logger.handlers:
        if getattr(h, _CONSOLE_HANDLER_ATTR, False) or getattr(h, _FILE_HANDLER_ATTR, False):
            h.setLevel(logger.level)
            h.setFormatter(_make_formatter(json_mode))

    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            continue
        logger.removeHandler(h)
        with contextlib.suppress(Exception):
            h.close()
    if abs_path is None or any(getattr(h, "baseFilename", None) == abs_path for h in logger.handlers):
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    # 10MB x 5 backups
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger obtained from :func:`get_logger`.
    event: str
        Event name (e.g. ``stream.start``).
    ctx: LogContext | None
        Provider/model/request context; merged shallowly.
    level: int
        Logging level for the record (INFO by default).
    keep_none: bool
        Preserve keys whose values are ``None`` (encoded as ``null``).
    **fields: Any
        Additional JSON-serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "error_code", "emitted")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: int | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a stream lifecycle event with the canonical key set.

    ``phase`` and ``emitted`` are always present (``emitted`` may be ``null``);
    ``error_code`` is omitted when ``None``. Extra fields never overwrite the
    canonical ones.
    """
    base_fields: Dict[str, Any] = {"phase": phase, "emitted": emitted}
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
