"""
Logging setup for the portfolio console.

Logs go to a file under the XDG data directory so they never interleave with
the terminal transcript.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from portfolio_console.runtime_config import PORTFOLIO_LOG_LEVEL_ENV, get_data_dir

LOG_FILE_NAME = "portfolio_console.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_file_path() -> Path:
    """Return the path of the log file in the XDG data directory."""
    return get_data_dir() / LOG_FILE_NAME


def setup_logging(level: Optional[str] = None) -> Path:
    """
    Configure the package logger to write to the log file.

    Args:
        level: Log level name; defaults to PORTFOLIO_LOG_LEVEL or INFO.

    Returns:
        Path of the log file in use.
    """
    level_name = (level or os.environ.get(PORTFOLIO_LOG_LEVEL_ENV) or "INFO").upper()
    log_file = get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger("portfolio_console")
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Avoid stacking handlers when create_app() is called more than once
    for handler in list(package_logger.handlers):
        if getattr(handler, "_portfolio_console", False):
            package_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(file_handler, "_portfolio_console", True)
    package_logger.addHandler(file_handler)
    package_logger.propagate = False

    return log_file
