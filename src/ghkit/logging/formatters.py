"""
Log record formatters.

Every formatter scrubs its final text with sanitize_string, because git
stderr and URLs end up in messages verbatim.
"""

import logging
from datetime import datetime

from ghkit.constants import SENSITIVE_KEYS

from .utils import sanitize_data, sanitize_string

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).strftime(DATE_FORMAT)


class GhkitFormatter(logging.Formatter):
    """
    "<time> LEVEL [logger] message" lines.

    Mapping and list arguments are sanitized key by key before formatting.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS

        parts = ["%(levelname)s", "[%(name)s]"]
        if include_timestamps:
            parts.insert(0, "%(asctime)s")
        if include_process_info:
            parts.append("[PID:%(process)d]")
        parts.append("%(message)s")
        super().__init__(fmt=" ".join(parts), datefmt=DATE_FORMAT)

    def _sanitize_arguments(self, record: logging.LogRecord) -> None:
        if isinstance(record.msg, (dict, list)):
            record.msg = sanitize_data(record.msg, self.sensitive_keys)
        elif isinstance(record.args, (tuple, list)):
            record.args = tuple(
                sanitize_data(arg, self.sensitive_keys)
                if isinstance(arg, (dict, list))
                else arg
                for arg in record.args
            )

    def format(self, record: logging.LogRecord) -> str:
        if not self.sanitize_sensitive:
            return super().format(record)
        self._sanitize_arguments(record)
        return sanitize_string(super().format(record))


class APICallFormatter(logging.Formatter):
    """
    One line per hosting API call, plus an indented error line on failure.

    Example:
        2026-10-19 17:27:34 DEBUG [ghkit.api] GET https://api.github.com/user -> 200 (120.0ms)
    """

    def __init__(self, sanitize_sensitive: bool = True, sensitive_keys: tuple = None):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        status = getattr(record, "api_status", None) or "---"
        millis = round(getattr(record, "api_duration", 0) * 1000, 2)
        text = (
            f"{_timestamp(record)} {record.levelname} [{record.name}] "
            f"{getattr(record, 'api_method', 'UNKNOWN')} {getattr(record, 'api_url', '')} "
            f"-> {status} ({millis}ms)"
        )
        api_error = getattr(record, "api_error", None)
        if api_error:
            text += f"\n    Error: {api_error}"
        return sanitize_string(text) if self.sanitize_sensitive else text


class GitOperationFormatter(logging.Formatter):
    """
    One line per git operation.

    Example:
        2026-10-19 17:27:35 INFO [ghkit.git] push origin ok (812.4ms) refspecs=3
    """

    def __init__(self, sanitize_sensitive: bool = True):
        self.sanitize_sensitive = sanitize_sensitive
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        outcome = "ok" if getattr(record, "git_success", True) else "FAILED"
        millis = round(getattr(record, "git_duration", 0) * 1000, 1)
        text = (
            f"{_timestamp(record)} {record.levelname} [{record.name}] "
            f"{getattr(record, 'git_operation', '?')} {getattr(record, 'git_target', '')} "
            f"{outcome} ({millis}ms)"
        )
        details = getattr(record, "git_details", None)
        if details:
            text += " " + " ".join(f"{key}={value}" for key, value in details.items())
        return sanitize_string(text) if self.sanitize_sensitive else text
