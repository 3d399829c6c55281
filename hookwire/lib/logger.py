"""Logging setup for applications using hookwire.

hookwire logs registrations, removals, wiring and dispatch through the root
logger at DEBUG level. To see them, load settings and apply them:

    ```python
    from hookwire.config import ConfigType, load_config
    from hookwire.lib.logger import configure_from_config

    configure_from_config(load_config(ConfigType.DEVELOPMENT, "hookwire.ini"))
    ```
"""

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from hookwire.constants import LOG_FOLDER_NAME


def get_log_directory() -> Path:
    """Get the log directory path based on the operating system

    Returns:
        Path: The path to the log directory
    """
    user_home = Path.home()
    if sys.platform.startswith("win"):
        return user_home / "AppData" / "Local" / LOG_FOLDER_NAME / "Logs"

    return user_home / ".config" / LOG_FOLDER_NAME / "logs"  # macOs and Linux use the same log path


def clean_old_logs(log_dir: Path, max_files: int = 5):
    """Remove old log files, keeping only the most recent `max_files` logs

    Args:
        log_dir (Path): The directory where the log files are stored.
        max_files (int, optional): The maximum number of log files to keep. Defaults to 5.
    """
    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime)
    while len(log_files) > max_files:
        old_log = log_files.pop(0)
        old_log.unlink()


def parse_log_level(level: Any) -> int:
    """Turn a level name ("debug", "INFO") or number into a logging level

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int = logging.DEBUG, log_dir: Path | None = None, max_log_files: int = 5
) -> list[logging.Handler]:
    """Configures the root logger with a console handler and an optional log file

    The console formatter is simpler than the file one and leaves out the date and
    time. Log files are named after the current date and time and only the
    `max_log_files` most recent ones are kept.

    Args:
        log_level (int): The log level to log at. Defaults to logging.DEBUG.
        log_dir (Path | None): Where to store the logs. No log file is written when None.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        list[logging.Handler]: The handlers installed on the root logger.
    """
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(
        logging.Formatter("%(levelname)s %(message)s", datefmt="%H:%M:%S")
    )
    handlers: list[logging.Handler] = [stream_handler]

    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        # Leave room for the file created below
        clean_old_logs(log_dir=log_dir, max_files=max(max_log_files - 1, 0))

        log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=10 * 1024**2, backupCount=5
        )
        file_handler.setFormatter(
            CustomFormatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    return handlers


def configure_from_config(settings: dict[str, Any], log_dir: Path | None = None):
    """Configures logging from settings returned by hookwire.config.load_config

    Args:
        settings (dict): Must hold LOG_LEVEL, LOG_TO_FILE and MAX_LOG_FILES.
        log_dir (Path | None): Overrides the default log directory when logging to file.
    """
    if settings["LOG_TO_FILE"] and log_dir is None:
        log_dir = get_log_directory()

    return configure_logger(
        log_level=parse_log_level(settings["LOG_LEVEL"]),
        log_dir=log_dir if settings["LOG_TO_FILE"] else None,
        max_log_files=settings["MAX_LOG_FILES"],
    )
