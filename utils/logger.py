import sys
from typing import Optional

import loguru

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(log_level: str = "WARNING", log_file: Optional[str] = None):
    """
    Route log records to stderr and, optionally, to a file.

    stdout is reserved for the generated context, so nothing is ever logged there.

    Args:
        log_level: Minimum level shown on stderr.
        log_file: Path of a rotating debug log. No file is written when omitted.
    """
    loguru.logger.remove()
    loguru.logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        loguru.logger.add(
            log_file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            enqueue=True,
            backtrace=True,
            diagnose=True,
        )

    return loguru.logger


logger = setup_logger()
