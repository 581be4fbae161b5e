"""Log stream setup: one ``[YYYY-MM-DD HH:MM:SS] message`` line per event."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_FLAG = "_xentropy_handler"


def setup_logging(log_file: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """Attach a single handler to the ``xentropy`` logger.

    With *log_file* the stream is appended to that file (created with mode
    0664 when missing); otherwise records go to stderr. Calling again with
    the same target is a no-op, a different target replaces the handler.
    """
    logger = logging.getLogger("xentropy")
    logger.setLevel(level)

    target = os.path.abspath(log_file) if log_file else None
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_FLAG, False):
            if getattr(h, "baseFilename", None) == target:
                return logger
            logger.removeHandler(h)
            h.close()

    if target:
        if not os.path.exists(target):
            open(target, "a").close()
            os.chmod(target, 0o664)
        handler: logging.Handler = logging.FileHandler(target, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _HANDLER_FLAG, True)
    logger.addHandler(handler)
    return logger
