"""
ghkit logging.

A daily-rotated log file in a platform specific directory, one-line records
for hosting API calls and git operations, and scrubbing of tokens and key
material before anything is written.
"""

from .config import LogConfig, LogLevel
from .logger import (
    get_logger,
    log_api_call,
    log_application_event,
    log_authentication_event,
    log_git_operation,
    setup_logging,
)
from .utils import get_log_directory, sanitize_data

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_git_operation",
    "log_application_event",
    "log_authentication_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory",
]
