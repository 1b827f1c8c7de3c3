from __future__ import annotations

import logging
import sys

# Third-party loggers that are only interesting when something goes wrong.
_NOISY_LOGGERS = ("sqlalchemy", "httpx", "httpcore")


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure root logging with a single stderr handler.

    Call this ONCE at startup. Calling it again replaces the handler
    instead of stacking duplicates.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
