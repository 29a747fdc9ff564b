"""
Logging setup for the Abroadly backend.

Everything logs through the standard ``logging`` module. The root logger
lets every record through and the handlers decide what is shown: the console
handler honours ``LOG_LEVEL`` while the optional ``abroadly.log`` file keeps
DEBUG and up. Noisy third-party loggers are quietened via ``MODULE_LOG_LEVELS``.
"""

import logging
from pathlib import Path
from typing import Optional

from abroadly.server.core.config import settings

LOG_LEVEL = settings.log_level.upper()
LOG_FORMAT = settings.log_format
LOG_FILE_DIR = settings.log_file_dir
ENABLE_FILE_LOGGING = settings.enable_file_logging
LOG_FILE_NAME = "abroadly.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

MODULE_LOG_LEVELS = {
    "abroadly": "INFO",
    "abroadly.server.api": "INFO",
    "abroadly.server.services": "DEBUG",
    "abroadly.server.services.ai_service": "DEBUG",
    "abroadly.core.database": "INFO",
    "abroadly.scripts": "INFO",
    # third-party
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "pypdf": "ERROR",
    "jose": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _handler(handler: logging.Handler, level, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Install the console (and optionally file) handlers on the root logger.

    Calling it again replaces the handlers instead of stacking new ones.

    Args:
        log_level: Console level, defaults to ``LOG_LEVEL``
        log_format: ``simple``, ``detailed`` or ``json``; anything else means detailed
        enable_file: Write ``abroadly.log`` as well, if file logging is enabled in settings
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(FORMATS.get(fmt, DETAILED_FORMAT), datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    root_logger.addHandler(_handler(logging.StreamHandler(), level, formatter))

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_handler(logging.FileHandler(log_dir / LOG_FILE_NAME), logging.DEBUG, formatter))

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually ``get_logger(__name__)``."""
    return logging.getLogger(name)
