# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_logging.py — Logging setup for applications using Chromahub.

The library modules only create loggers (``logging.getLogger(__name__)``)
and emit DEBUG records; nothing is configured on import.  Applications that
want to see those records call ``setup_logging()``.

Format examples:
    Human: 2026-01-28T13:45:12.345Z | DEBUG    | chroma_engine | Built MatrixTRCTransform(sRGB)
    JSON:  {"t": "2026-01-28T13:45:12.345000+00:00", "lvl": "DEBUG", "name": "chroma_engine", "msg": "..."}
"""

import json as _json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

__all__ = ["ChromaFormatter", "setup_logging", "get_logger"]

# Handler installed by setup_logging(); replaced on repeated calls.
_handler: Optional[logging.Handler] = None

# Top-level modules whose loggers Chromahub owns.
_LIBRARY_LOGGERS = (
    "chroma_engine",
    "chroma_hexcodec",
    "chroma_color",
    "chroma_hub",
    "chroma_spaces",
    "chroma_contrast",
)


class ChromaFormatter(logging.Formatter):
    """Human-readable (optionally colored) or JSON-lines formatter."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = False) -> None:
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'msg': record.getMessage(),
            }
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return _json.dumps(payload)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'
        line = f"{ts_str} | {level} | {record.name} | {record.getMessage()}"
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    *,
    json: bool = False,
    color: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Attach one stream handler to the Chromahub loggers (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    json : bool
        Emit JSON lines instead of the human format, default False
    color : bool
        ANSI colors in the human format when the stream is a TTY, default True
    stream : file-like, optional
        Destination, default ``sys.stderr``

    Returns
    -------
    logging.Handler
        The installed handler.  Repeated calls replace it.
    """
    global _handler

    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    out = stream if stream is not None else sys.stderr
    use_color = color and not json and hasattr(out, "isatty") and out.isatty()

    handler = logging.StreamHandler(out)
    handler.setFormatter(ChromaFormatter("json" if json else "human", use_color))

    for name in _LIBRARY_LOGGERS:
        lib_logger = logging.getLogger(name)
        if _handler is not None:
            lib_logger.removeHandler(_handler)
        lib_logger.addHandler(handler)
        lib_logger.setLevel(level)

    _handler = handler
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a named logger (thin wrapper, for symmetry with setup_logging)."""
    return logging.getLogger(name)
