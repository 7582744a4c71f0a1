from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Configure the root logger for the CLI and the API server."""
    root = logging.getLogger()
    root.handlers.clear()
    level_name = (level or config.LOG_LEVEL).upper()
    # getLevelName maps known names to ints and anything else to a string
    numeric_level = logging.getLevelName(level_name)
    unknown_level = not isinstance(numeric_level, int)
    root.setLevel(logging.INFO if unknown_level else numeric_level)

    fmt = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)
    root.addHandler(stream_handler)

    log_file = log_file if log_file is not None else config.LOG_FILE
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.LOG_MAX_MB * 1024 * 1024,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    # Keep per-request access logs quiet; warnings still come through.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if unknown_level:
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", level_name)
