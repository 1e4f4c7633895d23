"""
Utility modules for the engine.
"""

from .config import Config
from .url import normalize_url, join_url
from .logging import setup_logging, get_default_log_file, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'normalize_url',
    'join_url',
    'setup_logging',
    'get_default_log_file',
    'log_exception',
    'PerformanceLogger',
]
