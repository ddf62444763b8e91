"""
Logging configuration for StudyCards

Sinks are configured once at import from settings. ``configure_logging`` can
be called again to point them somewhere else (a different level or file).
"""
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]}:{function}:{line} - {message}"


def configure_logging(
    level: str = settings.LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = settings.LOG_FILE,
    debug: bool = settings.DEBUG_MODE
):
    """
    Replace all loguru sinks with a console sink and, if log_file is set,
    a rotating file sink.

    Records logged without ``get_logger`` are attributed to "studycards".
    """
    logger.remove()
    logger.configure(extra={"component": "studycards"})

    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True, backtrace=debug, diagnose=debug)
    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8",
            level=level,
            format=FILE_FORMAT
        )


def get_logger(name: str):
    """Logger whose records carry the given component name"""
    return logger.bind(component=name)


configure_logging()
