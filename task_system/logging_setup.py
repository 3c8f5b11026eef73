from __future__ import annotations

import logging
import sys

_QUIET_LOGGERS = ("sqlalchemy", "passlib", "uvicorn.access")


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root logging with a single stderr handler.

    Call this ONCE, before the app is built. Library loggers listed in
    _QUIET_LOGGERS are held at WARNING so request logs stay readable.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level {level!r}")
        level = resolved

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
