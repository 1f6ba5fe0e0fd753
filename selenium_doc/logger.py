"""
Logging for the Selenium doc generator.

All module loggers are children of "selenium_doc", so one call to
setup_logger() configures the whole pipeline. The default level comes from
SELENIUM_DOC_LOG_LEVEL when it is set.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "selenium_doc"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _default_level() -> int:
    # getLevelName() maps a known name to its number
    level = logging.getLevelName(os.getenv("SELENIUM_DOC_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure and return the generator's logger.

    The console handler (stdout) is attached on the first call only. Later
    calls change the level and may add a log file; a file already attached
    is not attached twice.

    Args:
        name: Logger name
        level: Logging level (default: SELENIUM_DOC_LOG_LEVEL or INFO)
        log_file: Optional file that receives the same records

    Returns:
        Configured logger instance
    """
    if level is None:
        level = _default_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = os.path.abspath(log_file)
        attached = [h for h in logger.handlers
                    if isinstance(h, logging.FileHandler) and h.baseFilename == log_path]
        if not attached:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Child logger of one pipeline stage, e.g. "selenium_doc.parser"."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
