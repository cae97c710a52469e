"""Logging configuration for the recommendation engine."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from config.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("aiohttp", "sqlalchemy", "urllib3")


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure the root logger once for the CLI and scripts.

    Args:
        level: Log level name; defaults to settings.log_level
        log_file: Rotating log file path; defaults to settings.log_file

    Returns:
        The root logger. Repeated calls leave existing handlers untouched.
    """
    root = logging.getLogger()
    if root.handlers:
        return root

    level_name = (level or settings.log_level).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_file = log_file or settings.log_file
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
