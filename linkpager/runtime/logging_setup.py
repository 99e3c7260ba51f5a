"""File logging for the pager process.

The screen belongs to the pager while it runs, so log records only ever go to
a file under the per-user log directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logging(level: int = logging.INFO, log_file: Path | None = None) -> Path | None:
    """Attach a file handler to the package logger.

    Returns the log path in use, or ``None`` when the file could not be
    opened; logging problems never stop the pager from starting.
    """
    path = DEFAULT_LOG_PATH if log_file is None else log_file
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(level)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return path
