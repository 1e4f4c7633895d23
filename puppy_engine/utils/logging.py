"""
Logging setup for the engine and its command line front end.

Library modules only create module loggers; handlers are installed by
setup_logging, which the CLI calls once.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional

ROOT_LOGGER_NAME = "puppy_engine"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}


class LogFormatter(logging.Formatter):
    """Formatter that colors the level name on terminals."""

    RESET = '\033[0m'
    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m\033[1m'
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to color level names
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        if self.colored and color:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return formatted


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Install console and file handlers on the engine logger.

    Calling it again for an already configured logger is a no-op.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level name
        file_level: File logging level name
        component: Optional sub-logger name, e.g. "cli"

    Returns:
        logging.Logger: The configured logger
    """
    logger_name = ROOT_LOGGER_NAME
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)
    if logger.handlers:
        return logger

    console = LOG_LEVELS.get(console_level.upper(), logging.WARNING)
    logger.setLevel(console)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console)
    console_handler.setFormatter(LogFormatter(
        colored=sys.stderr.isatty(),
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file = LOG_LEVELS.get(file_level.upper(), logging.DEBUG)
        logger.setLevel(min(console, file))
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s",
            datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def get_default_log_file() -> str:
    """
    Get the default log file path, ~/.puppy_engine/logs/puppy_engine_YYYY-MM-DD.log.

    Returns:
        str: Default log file path
    """
    log_dir = os.path.join(os.path.expanduser("~"), ".puppy_engine", "logs")
    date_str = datetime.now().strftime("%Y-%m-%d")
    return os.path.join(log_dir, f"puppy_engine_{date_str}.log")


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception with its traceback.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Times pipeline stages and logs their durations."""

    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.

        Args:
            logger: Logger to use
            component: Component name prefixed to every message
        """
        self.logger = logger
        self.component = component
        self.durations: Dict[str, float] = {}

    @contextmanager
    def measure(self, name: str, level: str = "DEBUG") -> Iterator[None]:
        """
        Time the enclosed block and log its duration.

        Args:
            name: Stage name
            level: Log level name
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            self.log(name, time.perf_counter() - start, level)

    def log(self, name: str, duration: float, level: str = "DEBUG") -> None:
        self.durations[name] = duration
        self.logger.log(LOG_LEVELS.get(level.upper(), logging.DEBUG),
                        f"{self.component} {name} took {duration:.4f} seconds")

    def clear(self) -> None:
        self.durations.clear()
