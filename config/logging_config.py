"""Application-wide logging setup.

The root logger is configured once per process with a console handler
and, unless ``LOG_TO_FILE`` is off, a file handler rotated at midnight.
Modules obtain child loggers through ``logging.getLogger(__name__)``; the
handlers live on the root of the hierarchy so those records are emitted too.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler

from config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(
    level: str | None = None,
    log_dir: str | None = None,
    backup_count: int = 7,
) -> logging.Logger:
    """Configure the root logger once and return it."""

    global _configured
    root = logging.getLogger()
    if _configured:
        return root

    root.setLevel(level or settings.LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        target_dir = log_dir or settings.LOG_DIR
        try:
            os.makedirs(target_dir, exist_ok=True)
            current_date = datetime.now().strftime("%Y_%m_%d")
            file_handler = TimedRotatingFileHandler(
                os.path.join(target_dir, f"dashboard_{current_date}.log"),
                when="midnight",
                interval=1,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as exc:
            root.warning("File logging disabled: %s", exc)
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    _configured = True
    return root


__all__ = ["LOG_FORMAT", "setup_logging"]
